"""
CLI entry point for shapeindex.

Usage:
    shapeindex mods [--parse]          List installed mods
    shapeindex lookup <uuid>           Show which mods define a shape
    shapeindex expand <path>           Expand $GAME_DATA, $CONTENT_<id>, ... in a path
    shapeindex init-config [path]      Write a default config file
"""

import argparse
import logging
import sys
from pathlib import Path

from shapeindex import __version__


def _build_registry(args, parse_definitions=None):
    """Load the mods for the configured installation. None means use the config setting."""
    from .config import get_config
    from .mods import PackageRegistry
    from .paths import PathResolver

    config = get_config(args.config)
    config.set("installation_dir", args.install_dir)
    config.set("user_dir", args.user_dir)
    config.set("workshop_dir", args.workshop_dir)

    logging.basicConfig(
        level=(args.log_level or config.log_level).upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    registry = PackageRegistry(PathResolver.from_config(config), max_depth=config.max_depth)
    if parse_definitions is None:
        parse_definitions = config.parse_definitions
    registry.reload(parse_definitions=parse_definitions)
    return registry


def cmd_mods(args):
    """List installed mods."""
    registry = _build_registry(args, True if args.parse else None)

    for package in registry:
        kind = "builtin" if package.is_synthetic else "mod"
        print(f"{package.local_id:<38} {kind:<8} {package.definition_count:>6}  {package.name}")
        if args.verbose:
            print(f"    {package.directory}")

    print(f"\n{len(registry)} mods, {registry.definition_count} shapes")
    return 0


def cmd_lookup(args):
    """Show which mods define a shape uuid."""
    registry = _build_registry(args, True)

    owners = registry.lookup_by_uuid(args.uuid)
    if not owners:
        print(f"No mod defines {args.uuid}", file=sys.stderr)
        return 1

    for package in owners:
        definition = package.definitions[args.uuid]
        print(f"{package.local_id}  {definition.category.value}  {package.name}")
    return 0


def cmd_expand(args):
    """Expand placeholders in a path."""
    registry = _build_registry(args, False)
    print(registry.expand_placeholders(args.path))
    return 0


def cmd_init_config(args):
    """Write a default config file."""
    from .config import write_default_config

    path = write_default_config(Path(args.path) if args.path else None)
    print(f"Wrote {path}")
    return 0


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Scrap Mechanic mod and shape index",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    shapeindex mods --parse
    shapeindex lookup 628b2d61-5ceb-43e9-8334-a4135566df7a
    shapeindex expand '$CONTENT_e94ba6d5-ae4f-4a06-8c4c-1bd6a56c5a8e/preview.png'
"""
    )
    parser.add_argument('--version', action='version', version=f'shapeindex {__version__}')
    parser.add_argument('--config', type=Path, help='Config file (default: ~/.shapeindex/config.yaml)')
    parser.add_argument('--install-dir', type=Path, help='Game installation directory')
    parser.add_argument('--user-dir', type=Path, help='User profile directory (User_<id>)')
    parser.add_argument('--workshop-dir', type=Path, help='Workshop content directory')
    parser.add_argument('--log-level', help='DEBUG, INFO, WARNING, ...')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # mods
    mods_p = subparsers.add_parser('mods', help='List installed mods')
    mods_p.add_argument('-p', '--parse', action='store_true', help='Parse ShapeSets')
    mods_p.add_argument('-v', '--verbose', action='store_true')
    mods_p.set_defaults(func=cmd_mods)

    # lookup
    lookup_p = subparsers.add_parser('lookup', help='Find mods defining a shape')
    lookup_p.add_argument('uuid', help='Shape uuid')
    lookup_p.set_defaults(func=cmd_lookup)

    # expand
    expand_p = subparsers.add_parser('expand', help='Expand path placeholders')
    expand_p.add_argument('path', help='Path containing placeholders')
    expand_p.set_defaults(func=cmd_expand)

    # init-config
    init_p = subparsers.add_parser('init-config', help='Write a default config file')
    init_p.add_argument('path', nargs='?', help='Where to write it')
    init_p.set_defaults(func=cmd_init_config)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    from .mods.errors import InstallationNotConfiguredError

    try:
        return args.func(args)
    except InstallationNotConfiguredError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
