def run() -> None:
    """
    Run before every entry point:
        fastapi server
        scripts
    """
    from loguru import logger

    from crm.common.logs import configure_logging

    configure_logging()
    configure_models()

    logger.info('application setup complete ✅')


def teardown() -> None:
    from crm.network.database.connection import reset_connection_manager

    reset_connection_manager()


def configure_models() -> None:
    """
    Repositories must be imported before the first connection so their
    indexes are ensured when it is established
    """
    from crm.common.model import import_model_modules

    import_model_modules()
