"""
Host context detection for FlashCalc
Reports whether the calculator runs inside a host mini app container
"""
import logging
from dataclasses import dataclass

import config

logger = logging.getLogger(__name__)


class HostSDK:
    """Interface of the host container SDK."""

    def is_in_mini_app(self):
        raise NotImplementedError

    def ready(self):
        raise NotImplementedError


class StandaloneSDK(HostSDK):
    """SDK used when no host container is present (desktop GUI)."""

    def is_in_mini_app(self):
        return False

    def ready(self):
        pass


class RequestHostSDK(HostSDK):
    """SDK built from the hints a web request carries.

    The host handshake itself runs in the page (web/index.html), which only
    adds the mini app hint once the host SDK has confirmed the container.
    """

    TRUTHY = {"1", "true", "yes"}

    def __init__(self, headers, args):
        self.headers = headers
        self.args = args
        self.ready_signalled = False

    def is_in_mini_app(self):
        hint = self.headers.get(config.MINI_APP_HEADER) or self.args.get(config.MINI_APP_QUERY_PARAM) or ""
        return hint.strip().lower() in self.TRUTHY

    def ready(self):
        self.ready_signalled = True


@dataclass
class HostContext:
    is_mini_app: bool = False
    label: str = config.ENV_LABEL_WEB
    ready: bool = False


class HostContextNotifier:
    def __init__(self, sdk):
        self.sdk = sdk

    def start(self, after_render=None):
        """Detect the host, run the initial render, then signal readiness.

        SDK failures are logged and leave the context at its ``web`` default.
        """
        context = HostContext()
        try:
            context.is_mini_app = bool(self.sdk.is_in_mini_app())
            logger.info("isInMiniApp = %s", context.is_mini_app)
            context.label = config.ENV_LABEL_MINI_APP if context.is_mini_app else config.ENV_LABEL_WEB
        except Exception:
            logger.exception("Host SDK error or not in mini app context")
            context = HostContext()

        if after_render is not None:
            after_render(context)

        if context.is_mini_app:
            try:
                self.sdk.ready()
                context.ready = True
                logger.info("ready() called, host splash should be hidden")
            except Exception:
                logger.exception("Host SDK ready() failed")
        return context
