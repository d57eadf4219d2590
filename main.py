import argparse
import logging
import signal
import threading

from vaccinewatch.config import load_settings
from vaccinewatch.domain import FetchError
from vaccinewatch.notifier import build_notifier
from vaccinewatch.worker import run_check_once, run_forever
from vaccinewatch.zip_filter import load_zip_filter


def _setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="vaccinewatch: new vaccine appointment watcher")
    parser.add_argument(
        "-z",
        "--zips-path",
        help="JSON file with an array of target zip codes. If omitted all zip codes are considered",
    )
    parser.add_argument("-s", "--state", required=True, help="Two-letter state code to poll, e.g. CA")
    parser.add_argument("-f", "--from-email", help="Email address to send alerts from")
    parser.add_argument("-t", "--to-email", help="Email address to send alerts to")
    parser.add_argument("--once", action="store_true", help="Run single check and exit")
    return parser


def main() -> int:
    args = _build_parser().parse_args()

    settings = load_settings(
        state=args.state,
        zips_path=args.zips_path,
        from_email=args.from_email,
        to_email=args.to_email,
    )
    _setup_logging(settings.log_level)
    log = logging.getLogger(__name__)
    log.debug("Starting with settings: %s", settings)

    if (settings.from_email is None) != (settings.to_email is None):
        log.warning("Both --from-email and --to-email are needed for email alerts; printing to console")

    zip_filter = load_zip_filter(settings.zips_path)
    notifier = build_notifier(settings)

    if args.once:
        try:
            run_check_once(settings, notifier=notifier, zip_filter=zip_filter)
        except FetchError as e:
            log.error("Check failed (%s)", e)
            return 1
        return 0

    stop = threading.Event()

    def _request_stop(signum, frame) -> None:
        log.info("Received signal %s, stopping after current check", signum)
        stop.set()

    signal.signal(signal.SIGINT, _request_stop)
    signal.signal(signal.SIGTERM, _request_stop)

    run_forever(settings, notifier=notifier, zip_filter=zip_filter, stop=stop)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
