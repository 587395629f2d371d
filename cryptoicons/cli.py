"""CLI entrypoints for crypto-icons commands."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Dict, List

from .catalog import CatalogError
from .config import ConfigError, load_config, update_config
from .logging import configure_logging
from .models import BatchReport, Category, ItemStatus
from .orchestrator import Orchestrator
from .registry import RegistryError
from .rendering import TemplateError

_KNOWN_ERRORS = (ConfigError, RegistryError, TemplateError, CatalogError)


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_dir_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--dir",
        dest="target_dir",
        default=None,
        help="Icons directory (defaults to targetDirectory from crypto-mui-icon-cli.json).",
    )


def _add_selection_options(parser: argparse.ArgumentParser) -> None:
    for category in Category:
        parser.add_argument(
            f"--{category.value}",
            dest=f"{category.value}_names",
            nargs="+",
            default=[],
            metavar="NAME",
            help=f"One or more {category.value} names.",
        )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crypto-icons",
        description="Scaffold and maintain crypto token, wallet and system icon components.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser(
        "init",
        help="Create the icons directory structure and seed files.",
    )
    _add_verbose_option(init_parser, suppress_default=True)
    _add_dir_option(init_parser)
    init_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite seed files that already exist.",
    )

    add_parser = subparsers.add_parser(
        "add",
        help="Add icon components and register them in generated files.",
    )
    _add_verbose_option(add_parser, suppress_default=True)
    _add_dir_option(add_parser)
    _add_selection_options(add_parser)

    remove_parser = subparsers.add_parser(
        "remove",
        help="Remove icon components and every reference to them.",
    )
    _add_verbose_option(remove_parser, suppress_default=True)
    _add_dir_option(remove_parser)
    _add_selection_options(remove_parser)

    catalog_parser = subparsers.add_parser(
        "catalog",
        help="Refresh the special-icon registry from an asset listing.",
    )
    _add_verbose_option(catalog_parser, suppress_default=True)
    catalog_parser.add_argument(
        "--category",
        required=True,
        choices=[category.value for category in Category],
        help="Category the listing belongs to.",
    )
    catalog_parser.add_argument(
        "--listing",
        required=True,
        type=Path,
        help="File with one asset name per line, or a JSON array of names.",
    )
    catalog_parser.add_argument(
        "--registry",
        type=Path,
        default=None,
        help="Registry YAML to update (defaults to specialIconsFile or ./special-icons.yml).",
    )
    catalog_parser.add_argument(
        "--markdown",
        type=Path,
        default=None,
        help="Markdown file whose catalog table should be refreshed.",
    )

    config_parser = subparsers.add_parser(
        "config",
        help="Show or update crypto-mui-icon-cli.json.",
    )
    _add_verbose_option(config_parser, suppress_default=True)
    config_parser.add_argument(
        "--set-dir",
        default=None,
        help="Store a new targetDirectory (relative to the project root).",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for crypto-icons commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    try:
        if args.command == "config":
            _run_config(args)
            return

        orchestrator = Orchestrator(load_config())

        if args.command == "init":
            report = orchestrator.run_init(args.target_dir, force=bool(args.force))
            print(
                f"Initialized {report.root}: {len(report.created)} created, "
                f"{len(report.overwritten)} overwritten, {len(report.kept)} kept"
            )
        elif args.command in ("add", "remove"):
            selections = _selections(args)
            if not selections:
                parser.exit(
                    1,
                    f"Nothing to {args.command}. Pass --token, --wallet or --system with one or more names.\n",
                )
            if args.command == "add":
                batch = orchestrator.run_add(selections, args.target_dir)
            else:
                batch = orchestrator.run_remove(selections, args.target_dir)
            _print_report(batch)
            if not batch.ok:
                parser.exit(1, f"{len(batch.failed)} item(s) failed. Run with --verbose for more details.\n")
        elif args.command == "catalog":
            catalog = orchestrator.run_catalog(
                Category(args.category),
                args.listing,
                registry_path=args.registry,
                markdown_path=args.markdown,
            )
            print(f"Cataloged {len(catalog.names)} {args.category} icons ({len(catalog.special)} special)")
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except _KNOWN_ERRORS as exc:
        parser.exit(1, f"{exc}\n")
    except Exception as exc:
        parser.exit(1, f"crypto-icons {args.command} failed: {exc}\nRun with --verbose for more details.\n")


def _run_config(args: argparse.Namespace) -> None:
    if args.set_dir is not None:
        config = update_config(target_directory=args.set_dir)
        print(f"Target directory set to {config.target_directory} in {config.path}")
        return
    config = load_config()
    print(f"Config file: {config.path}{'' if config.path.exists() else ' (not created yet)'}")
    print(f"Target directory: {config.target_directory}")
    if config.templates_dir is not None:
        print(f"Templates directory: {config.templates_dir}")
    registry = config.registry_path()
    print(f"Special icons file: {registry if registry is not None else '(packaged default)'}")


def _selections(args: argparse.Namespace) -> Dict[Category, List[str]]:
    selections: Dict[Category, List[str]] = {}
    for category in Category:
        names = list(getattr(args, f"{category.value}_names", None) or [])
        if names:
            selections[category] = names
    return selections


def _print_report(report: BatchReport) -> None:
    for outcome in report.outcomes:
        marker = "x" if outcome.status is ItemStatus.FAILED else "-"
        line = f"{marker} {outcome.category.value} {outcome.name}: {outcome.status.value}"
        if outcome.detail:
            line += f" ({outcome.detail})"
        print(line)
    print(f"Done: {report.summary()}")


if __name__ == "__main__":  # pragma: no cover
    main()
