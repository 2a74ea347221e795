from .bgl_master import BGLEntry, BGLMaster, DEFAULT_BGL_ENTRIES, UNCATEGORIZED

__all__ = ['BGLEntry', 'BGLMaster', 'DEFAULT_BGL_ENTRIES', 'UNCATEGORIZED']
