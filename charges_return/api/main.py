from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import uuid
import time
from charges_return import __version__
from charges_return.api.endpoints import reports, reference
from charges_return.common.logging_config import setup_logging, set_request_id, get_logger
from charges_return.common.settings import get_settings

settings = get_settings()
setup_logging(settings.log_level, settings.log_file)
logger = get_logger("api.main")

app = FastAPI(title="Charges Return API", version=__version__)


@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    request_id = str(uuid.uuid4())
    set_request_id(request_id)

    start_time = time.time()
    logger.info(
        f"Request started: {request.method} {request.url.path}",
        method=request.method,
        path=request.url.path,
        client=request.client.host if request.client else "unknown",
    )

    try:
        response = await call_next(request)
    except Exception as e:
        logger.error(
            f"Request failed: {e}",
            exc_info=True,
            process_time_ms=round((time.time() - start_time) * 1000, 2),
        )
        raise

    logger.info(
        f"Request completed: {request.method} {request.url.path} - Status: {response.status_code}",
        status_code=response.status_code,
        process_time_ms=round((time.time() - start_time) * 1000, 2),
    )
    response.headers["X-Request-ID"] = request_id
    return response


origins = [
    "http://localhost:5173",
    "http://localhost:3000",
    "http://127.0.0.1:5173",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(reports.router, prefix="/api/reports", tags=["Reports"])
app.include_router(reference.router, prefix="/api/reference", tags=["Reference"])


@app.get("/api/health")
def health_check():
    return {"status": "ok", "app": "Charges Return"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8010)
