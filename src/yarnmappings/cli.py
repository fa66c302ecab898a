"""Command-line entry point: ``yarnmappings -m 1.20.1 -k method getBlockState``."""

from __future__ import annotations

import json
import logging
import sys
from typing import List, Optional

from . import config
from .args import parse_args
from .common.logging_utils import configure_logging
from .constants import ExitCodes
from .errors import NoSuchVersionError, PersistenceError, TransportError
from .handler import YarnMappingHandler
from .models import EntryKind, MappingEntry, NamingScheme

logger = logging.getLogger(__name__)


def format_entry(entry: MappingEntry) -> str:
    """One line per entry: kind, then the names that are present."""
    names = "  ".join(
        f"{scheme.value}={scheme.get(entry)}" for scheme in NamingScheme if scheme.get(entry)
    )
    line = f"{entry.kind.value:<6} {names}"
    if entry.owner:
        line += f"  owner={entry.owner}"
    if entry.descriptor:
        line += f"  desc={entry.descriptor}"
    return line


def render(results: List[MappingEntry], output_format: str) -> str:
    if output_format == "json":
        return json.dumps([entry.to_dict() for entry in results], indent=2)
    return "\n".join(format_entry(entry) for entry in results)


def main(argv: Optional[List[str]] = None) -> None:
    """Main function of the program."""
    args = parse_args(argv)
    configure_logging(args.LOG_LEVEL)
    try:
        config.configure(args)
    except ValueError as exc:
        logger.error("%s", exc)
        sys.exit(ExitCodes.FILE_ERROR.value)

    handler = YarnMappingHandler()
    kind = EntryKind.parse(args.KIND)
    scheme = NamingScheme.parse(args.SCHEME) if args.SCHEME else None
    try:
        if args.FORCE_REFRESH:
            handler.refresh(args.MC_VERSION, force=True)
        if args.EXACT:
            results = handler.lookup_exact(scheme, kind, args.MC_VERSION, args.query)
        else:
            results = handler.lookup(kind, args.MC_VERSION, args.query, scheme)
    except NoSuchVersionError as exc:
        logger.error("%s", exc)
        sys.exit(ExitCodes.NO_SUCH_VERSION.value)
    except TransportError as exc:
        logger.error("Could not reach Fabric servers: %s", exc)
        sys.exit(ExitCodes.CONNECTION_ERROR.value)
    except PersistenceError as exc:
        logger.error("Mapping data error: %s (%s)", exc, exc.path)
        sys.exit(ExitCodes.FILE_ERROR.value)

    if not results:
        logger.warning("No %s mappings found for %r", kind.value, args.query)
        sys.exit(ExitCodes.NO_RESULTS.value)
    sys.stdout.write(render(results, args.OUTPUT_FORMAT) + "\n")
    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
