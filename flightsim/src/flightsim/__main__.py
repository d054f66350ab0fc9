import asyncio
import functools
import io
import os
import random
import signal
import sys
import traceback

from flightsim import api
import flightsim.log
from flightsim.analysis import AnalysisService
from flightsim.config import Config
from flightsim.engine import Engine
from flightsim.log import log
from flightsim.runnable import Runnable
from flightsim.simulation import Ticker
from flightsim.store import EntityStore
from flightsim.traffic import generate_world_traffic


async def main() -> int:
    flightsim.log.set_src_root(os.path.dirname(__file__))

    try:
        config = Config.from_env()
    except ValueError as exc:
        log(f"configuration error: {exc}")
        return os.EX_CONFIG

    rng = random.Random(config.seed)
    store = EntityStore(generate_world_traffic(config.fleet_size, rng))
    log(f"generated {len(store)} flights")

    server = api.Server(config.listen_host, config.listen_port)
    engine = Engine(store, server, AnalysisService(config.analysis_delay, rng))
    server.attach(engine)

    runnables: list[Runnable] = [
        Ticker(config.tick_interval, engine.tick),
        server,
    ]

    def graceful_shutdown(signame: str) -> None:
        log(signame)
        [r.stop() for r in runnables]

    loop = asyncio.get_running_loop()
    for signame in ("SIGINT", "SIGTERM"):
        loop.add_signal_handler(getattr(signal, signame), functools.partial(graceful_shutdown, signame))

    try:
        await asyncio.gather(*[r.run() for r in runnables])
    except Exception as exc:  # pylint: disable=broad-exception-caught
        log("uncaught exception")
        traceback_buffer = io.StringIO()
        traceback.print_exception(exc, file=traceback_buffer)
        log(traceback_buffer.getvalue())
        return os.EX_SOFTWARE

    return os.EX_OK


def run() -> None:
    _exit_status = asyncio.run(main())
    log(f"sys.exit({_exit_status})")
    sys.exit(_exit_status)


if __name__ == "__main__":
    run()
