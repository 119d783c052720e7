"""Entry point: load config and run the relay; exit non-zero on any failure."""

import sys

from tcp2serial.bridge import configure_logging, run_relay
from tcp2serial.config import load_config, parse_args
from tcp2serial.errors import RelayError


def main(argv=None):
    args = parse_args(argv)
    configure_logging(args.verbose)
    try:
        config = load_config(args.config)
        run_relay(config)
    except RelayError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
