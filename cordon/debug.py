# Cordon CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""Observer hooks that trace command invocations through the `cordon` logger."""
from cordon.context import Context
from cordon.hook_manager import HookManager, HookType
from cordon.logger import logger

MAX_RESULT_REPR = 100


def _short_repr(value) -> str:
    text = repr(value)
    if len(text) > MAX_RESULT_REPR:
        return f"{text[:MAX_RESULT_REPR]} ..."
    return text


def log_before(context: Context):
    logger.info(
        "[%s] Starting -> flags=%r args=%r", context.name, context.flags, context.args
    )


def log_success(context: Context):
    logger.debug("[%s] Success -> Result: %s", context.name, _short_repr(context.result))


def log_after(context: Context):
    logger.debug("[%s] Finished in %.3fs", context.name, context.duration or 0.0)


def log_error(context: Context):
    logger.error(
        "[%s] Error (%s): %s",
        context.name,
        type(context.exception).__name__,
        context.exception,
    )


def register_debug_hooks(hooks: HookManager):
    """Attach the logging observers to every hook point of `hooks`."""
    for hook_type, hook in (
        (HookType.BEFORE, log_before),
        (HookType.ON_SUCCESS, log_success),
        (HookType.ON_ERROR, log_error),
        (HookType.AFTER, log_after),
    ):
        hooks.register(hook_type, hook)
