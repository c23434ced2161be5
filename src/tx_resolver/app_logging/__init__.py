from .logger import configure_logging, get_logger, bind_context, bound_context, clear_context
from .tracer import Tracer, TraceStep

__all__ = ["configure_logging", "get_logger", "bind_context", "bound_context", "clear_context", "Tracer", "TraceStep"]
