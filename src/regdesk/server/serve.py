"""Start a pounce ASGI server with the live regdesk App object."""


def run_server(app: object, host: str, port: int, *, reload: bool = False) -> None:
    """Serve *app* on *host*:*port* until interrupted.

    Pounce's ``run()`` takes an import string, but we hold a live ``App``
    object, so ``pounce.Server`` is used directly with the ASGI callable.
    One worker: submissions are independent and nothing is shared.

    Args:
        app: ASGI callable (regdesk App instance).
        host: Bind host address.
        port: Bind port number.
        reload: Restart on file changes (debug mode).
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(host=host, port=port, workers=1, reload=reload)
    Server(config, app).run()
