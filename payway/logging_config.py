"""
Configuración de logging estructurado.

La librería no configura nada al importarse: la aplicación que la usa
llama a configure_logging() si quiere este formato.
"""

import logging

import structlog


def configure_logging(environment: str = "development", level: str = "INFO") -> None:
    """
    Configura structlog sobre el logging estándar.

    Args:
        environment: "production" usa JSON, el resto salida de consola
        level: Nivel mínimo de log
    """
    logging.basicConfig(format="%(message)s", level=level.upper())

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if environment == "production"
            else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
