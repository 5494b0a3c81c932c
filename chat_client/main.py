"""
Interactive command-line chat client.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading

from .chat_service import ChatSession, StreamCoordinator
from .config import Configuration
from .logging_utils import configure_logging
from .sink import ConsoleSink
from .transport import HttpxChatTransport

PROMPT = "> "
HELP_TEXT = "Commands: /agent <name>, /history, /quit"


async def read_line(prompt: str = PROMPT) -> str | None:
    """
    Read one line without blocking the event loop; None on EOF.

    input() runs on a daemon thread, not the default executor: executor
    workers are joined on shutdown, so a pending prompt would block Ctrl-C.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[str | None] = loop.create_future()

    def _settle(result: str | None, error: BaseException | None) -> None:
        if future.done():
            return
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(result)

    def _read() -> None:
        result, error = None, None
        try:
            result = input(prompt)
        except EOFError:
            pass
        except Exception as e:
            error = e
        # The loop is gone if the REPL was torn down while input() blocked.
        with contextlib.suppress(RuntimeError):
            loop.call_soon_threadsafe(_settle, result, error)

    threading.Thread(target=_read, name="chat-client-stdin", daemon=True).start()
    return await future


def handle_command(
    line: str, coordinator: StreamCoordinator, sink: ConsoleSink
) -> bool:
    """
    Apply a slash command.

    Returns:
        False when the REPL should exit.
    """
    command, _, argument = line.partition(" ")
    argument = argument.strip()

    if command == "/quit":
        return False
    if command == "/agent":
        if argument:
            coordinator.agent = argument
            sink.agent = argument
        sink.show_turn("system", f"agent: {sink.agent_label} ({coordinator.agent})")
    elif command == "/history":
        for turn in coordinator.history:
            sink.show_turn(turn.role, turn.content)
    else:
        sink.show_turn("system", HELP_TEXT)
    return True


async def repl(coordinator: StreamCoordinator, sink: ConsoleSink) -> None:
    """Read-submit loop until /quit or EOF."""
    for turn in coordinator.history:
        sink.show_turn(turn.role, turn.content)

    while True:
        line = await read_line()
        if line is None:
            break
        if line.startswith("/"):
            if not handle_command(line.strip(), coordinator, sink):
                break
            continue
        await coordinator.submit(line)


async def main() -> None:
    """Main entry point for the chat client."""
    config = Configuration()
    configure_logging(config.get_logging_config()["level"])

    client_config = config.get_client_config()
    http_config = config.get_http_client_config()
    streaming_config = config.get_streaming_config()

    sink = ConsoleSink(
        agent_labels=client_config["agents"],
        agent=client_config["default_agent"],
        fallback_label=client_config["fallback_agent_label"],
    )

    async with HttpxChatTransport(
        client_config["base_url"],
        client_config["endpoint"],
        timeouts=http_config,
    ) as transport:
        coordinator = StreamCoordinator(
            transport,
            sink,
            session=ChatSession.with_greeting(client_config["greeting"]),
            agent=client_config["default_agent"],
            encoding=streaming_config["encoding"],
            error_message=client_config["error_message"],
        )
        logging.info(
            f"Chat client ready: {client_config['base_url']}"
            f"{client_config['endpoint']}"
        )
        await repl(coordinator, sink)

    logging.info("Chat client shutdown complete")


def run() -> None:
    """Console script entry point."""
    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(main())


if __name__ == "__main__":
    run()
