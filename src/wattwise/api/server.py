"""Uvicorn launcher for the wattwise API."""

import logging

from wattwise.api.config import Settings, get_settings

logger = logging.getLogger(__name__)


def resolve_server_options(
    settings: Settings,
    host: str | None = None,
    port: int | None = None,
    reload: bool | None = None,
    workers: int | None = None,
) -> dict:
    """Merge command-line overrides onto the configured server options.

    Parameters
    ----------
    settings : Settings
        Settings supplying ``WATTWISE_API_*`` values
    host, port, reload, workers : optional
        Overrides; None keeps the configured value

    Returns
    -------
    dict
        ``host``, ``port``, ``reload`` and ``workers`` keyword arguments for
        ``uvicorn.run``
    """
    options = {
        "host": settings.API_HOST if host is None else host,
        "port": settings.API_PORT if port is None else port,
        "reload": settings.API_RELOAD if reload is None else reload,
        "workers": settings.API_WORKERS if workers is None else workers,
    }
    # uvicorn ignores workers when reloading
    if options["reload"] and options["workers"] != 1:
        logger.warning(f"Auto-reload enabled, ignoring workers={options['workers']}")
        options["workers"] = 1
    return options


def run_server(
    host: str | None = None,
    port: int | None = None,
    reload: bool | None = None,
    workers: int | None = None,
) -> None:
    """Run the wattwise API server.

    Unset arguments fall back to ``WATTWISE_API_HOST``, ``WATTWISE_API_PORT``,
    ``WATTWISE_API_RELOAD`` and ``WATTWISE_API_WORKERS``.

    Raises
    ------
    SystemExit
        If the ``api`` extra is not installed
    """
    try:
        import uvicorn
    except ImportError as e:
        raise SystemExit(
            "API dependencies not installed. Install with: pip install wattwise[api]"
        ) from e

    settings = get_settings()
    options = resolve_server_options(settings, host, port, reload, workers)

    if not settings.CATALOG_PATH:
        logger.warning("WATTWISE_CATALOG_PATH is not set, serving an empty catalog")
    logger.info(f"Starting wattwise API on http://{options['host']}:{options['port']}")

    uvicorn.run("wattwise.api.main:app", log_level="info", **options)
