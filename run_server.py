"""
Wrapper script for running the relay directly with uvicorn.
"""

if __name__ == "__main__":
    import uvicorn

    from care_relay.settings import app_settings

    uvicorn.run(
        "care_relay:application",
        factory=True,
        host=app_settings.HOST,
        port=app_settings.PORT,
        log_config={
            "version": 1,
            "disable_existing_loggers": False,
            "filters": {
                "exclude_metrics": {"()": "uvicorn_filters.ExcludeMetricsFilter"}
            },
            "handlers": {
                "access": {
                    "class": "logging.StreamHandler",
                    "filters": ["exclude_metrics"],
                    "stream": "ext://sys.stdout",
                }
            },
            "loggers": {
                "uvicorn.access": {
                    "handlers": ["access"],
                    "level": "INFO",
                    "propagate": False,
                }
            },
        },
    )
