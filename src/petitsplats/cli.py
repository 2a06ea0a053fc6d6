from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Callable

from .config import EffectiveConfig, config_to_toml, resolve_config
from .controller import FilterController
from .debounce import debounced_query
from .domain import FilterCategory
from .errors import (
    ConfigError,
    InvalidArgument,
    MissingFileError,
    PetitsPlatsError,
    ValidationError,
)
from .loader import load_recipes
from .options import SearchResult, format_count
from .sorting import sort_choices, sort_recipes
from .store import RecipeStore
from .suggest import suggest


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    handlers: dict[str, Callable[[argparse.Namespace, EffectiveConfig], int]] = {
        "search": _cmd_search,
        "options": _cmd_options,
        "suggest": _cmd_suggest,
        "browse": _cmd_browse,
        "config": _cmd_config,
    }

    try:
        cfg = resolve_config(_cli_args_dict(args))
        _configure_logging(cfg, args.verbose)
        return handlers[args.command](args, cfg)
    except PetitsPlatsError as exc:
        print(str(exc), file=sys.stderr)
        return _exit_code(exc)


def _build_parser() -> argparse.ArgumentParser:
    filters = argparse.ArgumentParser(add_help=False)
    filters.add_argument("query", nargs="?", default="")
    filters.add_argument("-i", "--ingredient", dest="ingredients", action="append", default=[])
    filters.add_argument("-a", "--appliance", dest="appliances", action="append", default=[])
    filters.add_argument("-u", "--utensil", dest="utensils", action="append", default=[])
    filters.add_argument("--json", action="store_true")

    parser = argparse.ArgumentParser(prog="petitsplats", parents=[_common_parser()])
    sub = parser.add_subparsers(dest="command")
    # Subcommand copies must not reset flags given before the command.
    common = _common_parser(argparse.SUPPRESS)

    search = sub.add_parser("search", parents=[common, filters])
    search.add_argument("--sort", dest="default_sort", choices=sort_choices())

    sub.add_parser("options", parents=[common, filters])

    suggestions = sub.add_parser("suggest", parents=[common])
    suggestions.add_argument("query")
    suggestions.add_argument("--limit", dest="suggestion_limit", type=int)

    browse = sub.add_parser("browse", parents=[common])
    browse.add_argument("--sort", dest="default_sort", choices=sort_choices())

    sub.add_parser("config", parents=[common])

    return parser


def _common_parser(default: object = None) -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False, argument_default=default)
    common.add_argument("--data", dest="data_path")
    common.add_argument("--project")
    common.add_argument("--min-query-length", type=int)
    common.add_argument("--debounce-ms", type=int)
    common.add_argument("--suggestion-limit", type=int)
    common.add_argument("--log-level")
    common.add_argument("--verbose", action="store_true")
    return common


def _cmd_search(args: argparse.Namespace, cfg: EffectiveConfig) -> int:
    result = _run_filters(args, cfg)
    if args.json:
        payload = result.to_dict()
        payload["resultSet"] = [recipe.to_dict() for recipe in sort_recipes(result.result_set, cfg.default_sort)]
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return 0

    _print_recipes(result, cfg.default_sort)
    return 0


def _cmd_options(args: argparse.Namespace, cfg: EffectiveConfig) -> int:
    result = _run_filters(args, cfg)
    if args.json:
        print(json.dumps(result.to_dict()["availableOptions"], indent=2, ensure_ascii=False))
        return 0

    for category in FilterCategory:
        values = result.options_for(category)
        print(f"{category.value} ({len(values)}): {', '.join(values)}")
    return 0


def _cmd_suggest(args: argparse.Namespace, cfg: EffectiveConfig) -> int:
    store = _load_store(cfg)
    for line in suggest(
        store.indexed,
        args.query,
        limit=cfg.suggestion_limit,
        min_query_length=cfg.min_query_length,
    ):
        print(line)
    return 0


def _cmd_browse(args: argparse.Namespace, cfg: EffectiveConfig) -> int:
    controller = FilterController(
        _load_store(cfg),
        on_change=lambda result: _print_recipes(result, cfg.default_sort),
        min_query_length=cfg.min_query_length,
    )
    on_query = debounced_query(controller, wait_ms=cfg.debounce_ms)
    for line in sys.stdin:
        on_query(line.rstrip("\n"))
    on_query.flush()
    return 0


def _cmd_config(args: argparse.Namespace, cfg: EffectiveConfig) -> int:
    print(config_to_toml(cfg))
    return 0


def _run_filters(args: argparse.Namespace, cfg: EffectiveConfig) -> SearchResult:
    controller = FilterController(_load_store(cfg), min_query_length=cfg.min_query_length)
    for category, values in (
        (FilterCategory.INGREDIENTS, args.ingredients),
        (FilterCategory.APPLIANCES, args.appliances),
        (FilterCategory.UTENSILS, args.utensils),
    ):
        for value in values:
            controller.select_value(category, value)
    return controller.set_query(args.query)


def _print_recipes(result: SearchResult, sort_key: str) -> None:
    print(format_count(result.count))
    for recipe in sort_recipes(result.result_set, sort_key):
        print(f"{recipe.id}: {recipe.name} ({recipe.time} min)")


def _load_store(cfg: EffectiveConfig) -> RecipeStore:
    if not cfg.data_path:
        raise ConfigError("data_path is required (set in config or via --data)")
    return RecipeStore(load_recipes(cfg.data_path))


def _configure_logging(cfg: EffectiveConfig, verbose: bool) -> None:
    level = logging.DEBUG if verbose else cfg.log_level_value
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _cli_args_dict(args: argparse.Namespace) -> dict[str, object]:
    return vars(args).copy()


def _exit_code(exc: PetitsPlatsError) -> int:
    if isinstance(exc, ConfigError):
        return 2
    if isinstance(exc, MissingFileError):
        return 3
    if isinstance(exc, ValidationError):
        return 4
    if isinstance(exc, InvalidArgument):
        return 5
    return 1
