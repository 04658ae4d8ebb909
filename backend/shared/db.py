from supabase import Client, ClientOptions, create_client

from shared.config import PortalConfig, load_config


def get_supabase_client(config: PortalConfig | None = None) -> Client:
    """Get initialized Supabase client.

    Every PostgREST request is bounded by ``config.record_store_timeout`` so
    callers that await notification fan-out in-line never hang on the store.
    """
    config = config or load_config()

    if not config.supabase_url or not config.supabase_service_key:
        raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_KEY must be set")

    options = ClientOptions(
        postgrest_client_timeout=config.record_store_timeout,
        auto_refresh_token=False,
        persist_session=False,
    )
    return create_client(config.supabase_url, config.supabase_service_key, options)
