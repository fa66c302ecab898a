"""Argument parsing functionality for the yarnmappings CLI."""

import argparse

from .models import EntryKind, NamingScheme


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="yarnmappings",
        description="Look up Fabric Yarn mappings for a Minecraft version",
        add_help=True,
    )

    parser.add_argument("query",
                        help="Name (or name suffix) to look up",
                        type=str)
    parser.add_argument("-m", "--mc-version",
                        dest="MC_VERSION",
                        help="Minecraft version, i.e: 1.20.1",
                        action="store", type=str,
                        required=True)
    parser.add_argument("-k", "--kind",
                        dest="KIND",
                        help="Entry kind to search (default: class)",
                        action="store", type=str.lower,
                        choices=[k.value for k in EntryKind],
                        default=EntryKind.CLASS.value)
    parser.add_argument("-n", "--scheme",
                        dest="SCHEME",
                        help="Naming scheme to match against; all schemes when omitted",
                        action="store", type=str.lower,
                        choices=[s.value for s in NamingScheme])
    parser.add_argument("-e", "--exact",
                        dest="EXACT",
                        help="Match the whole name, ignoring case, instead of a name suffix",
                        action="store_true")
    parser.add_argument("--force-refresh",
                        dest="FORCE_REFRESH",
                        help="Check for a newer Yarn build even if one was checked recently",
                        action="store_true")
    parser.add_argument("-f", "--format",
                        dest="OUTPUT_FORMAT",
                        help="Output format (text or json, default: text)",
                        action="store",
                        type=str.lower,
                        choices=["text", "json"],
                        default="text")

    parser.add_argument("-d", "--data-dir",
                        dest="DATA_DIR",
                        help="Directory holding downloaded mappings",
                        action="store",
                        type=str)
    parser.add_argument("--meta-url",
                        dest="META_URL",
                        help="Base URL of the Fabric metadata service",
                        action="store",
                        type=str)
    parser.add_argument("--maven-url",
                        dest="MAVEN_URL",
                        help="Base URL of the Fabric maven repository",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level (default: $YARNMAPPINGS_LOG_LEVEL or INFO)",
                        action="store",
                        type=str.upper,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        default=None)
    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)
