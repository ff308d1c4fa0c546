"""
Record store selection from settings
"""
import logging

from visitorlog.config import Settings
from visitorlog.database import make_engine, make_session_factory, init_db
from visitorlog.store.sql_store import SqlRecordStore
from visitorlog.store.supabase_store import SupabaseRecordStore

logger = logging.getLogger(__name__)


def build_record_store(settings: Settings):
    """Record store for the configured backend"""
    if settings.record_store == "sql":
        engine = make_engine(settings.database_url)
        init_db(engine)
        logger.info("Using SQL record store at %s", engine.url.render_as_string(hide_password=True))
        return SqlRecordStore(make_session_factory(engine))

    logger.info("Using Supabase record store at %s", settings.supabase_url)
    return SupabaseRecordStore.from_credentials(settings.supabase_url, settings.supabase_anon_key)
