# main.py
from typing import Optional

from httpdispatch.adapters.aiohttp_transport_adapter import AioHttpTransportAdapter
from httpdispatch.adapters.json_decoder_adapter import JsonResponseDecoder
from httpdispatch.adapters.logging_adapter import LoggingAdapter
from httpdispatch.core.config import DispatcherConfig, TransportConfig
from httpdispatch.core.logging_config import coerce_level, configure_logging
from httpdispatch.core.managers.dispatcher import Dispatcher
from httpdispatch.core.settings import DispatchSettings, app_settings


# main lives at the outermost layer (not in core)
# Instantiates all the concrete adapters
# Wires dependencies together

def create_dispatcher(
    settings: Optional[DispatchSettings] = None,
    configure_root_logging: bool = True,
) -> Dispatcher:
    """Build a Dispatcher backed by aiohttp and the pydantic JSON decoder.

    The returned dispatcher opens its transport session when entered:

        async with create_dispatcher() as dispatcher:
            outcome = await dispatcher.dispatch(UserRequest.build(user_id=123))
    """
    settings = settings or app_settings

    # Central logging configuration BEFORE creating the adapter logger
    if configure_root_logging:
        configure_logging(settings.HTTPDISPATCH_LOG_LEVEL)
    logger = LoggingAdapter("httpdispatch", settings.HTTPDISPATCH_LOG_LEVEL)
    if coerce_level(settings.HTTPDISPATCH_LOG_LEVEL) <= coerce_level("DEBUG"):
        settings.print_settings(logger)

    transport = AioHttpTransportAdapter(TransportConfig.from_app_settings(settings))
    dispatcher_config = DispatcherConfig.from_app_settings(settings)
    decoder = JsonResponseDecoder(strict=dispatcher_config.strict_decoding)

    return Dispatcher(
        transport,
        decoder=decoder,
        config=dispatcher_config,
        logger=logger,
    )
