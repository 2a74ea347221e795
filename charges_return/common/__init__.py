# Shared models, settings, errors and logging
