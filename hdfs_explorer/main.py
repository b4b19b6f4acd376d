#!/usr/bin/env python3
"""
HDFS Explorer

Browse and manage an HDFS namespace through its WebHDFS gateway.

Usage:
    hdfs-explorer ls /user/alice --gateway-url http://namenode:9870
    hdfs-explorer chmod 1777 /tmp/shared
    hdfs-explorer put /user/alice/in data.csv more.csv
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from . import cli

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--gateway-url",
        help="WebHDFS gateway URL (default: from config, else http://localhost:9870)",
    )
    common.add_argument(
        "--user",
        help="User name sent as user.name on every request",
    )
    common.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    parser = argparse.ArgumentParser(
        prog="hdfs-explorer",
        description="Browse and manage HDFS through WebHDFS",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("ls", parents=[common], help="List a directory")
    p.add_argument("path", nargs="?", default="/")
    p.set_defaults(func=cli.cmd_ls)

    p = sub.add_parser("info", parents=[common], help="Show file details and blocks")
    p.add_argument("path")
    p.set_defaults(func=cli.cmd_info)

    p = sub.add_parser("tail", parents=[common], help="Show the end of a file")
    p.add_argument("path")
    p.set_defaults(func=cli.cmd_tail)

    p = sub.add_parser("mkdir", parents=[common], help="Create a directory")
    p.add_argument("path")
    p.add_argument("--permission", help="Octal permission, e.g. 755")
    p.set_defaults(func=cli.cmd_mkdir)

    p = sub.add_parser("put", parents=[common], help="Upload files into a directory")
    p.add_argument("directory")
    p.add_argument("files", nargs="+")
    p.set_defaults(func=cli.cmd_put)

    p = sub.add_parser("chmod", parents=[common], help="Set permission bits")
    p.add_argument("permission")
    p.add_argument("path")
    p.set_defaults(func=cli.cmd_chmod)

    p = sub.add_parser("chown", parents=[common], help="Set owner and group (owner:group)")
    p.add_argument("owner")
    p.add_argument("path")
    p.set_defaults(func=cli.cmd_chown)

    p = sub.add_parser("setrep", parents=[common], help="Set replication factor")
    p.add_argument("replication")
    p.add_argument("path")
    p.set_defaults(func=cli.cmd_setrep)

    p = sub.add_parser("config", parents=[common], help="Show or update configuration")
    p.add_argument("--set-gateway-url")
    p.add_argument("--set-prefix")
    p.add_argument("--set-user")
    p.add_argument("--set-timeout", type=float)
    p.set_defaults(func=cli.cmd_config)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        code = args.func(args)
    except KeyboardInterrupt:
        log.info("Interrupted")
        code = 130
    sys.exit(code)


if __name__ == "__main__":
    main()
