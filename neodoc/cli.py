import argparse
import logging
from pathlib import Path
from typing import List, Optional

from neodoc.core.config import AppConfig, ConfigStore, Neo4jCfg, SourcesCfg
from neodoc.core.paths import resolve_config_path
from neodoc.db.neo4j_instance import Neo4jInstance, RowSource, fetch_rows
from neodoc.docs import procedures
from neodoc.docs.config_docs import ConfigDocsGenerator
from neodoc.docs.functions import FunctionReferenceGenerator
from neodoc.docs.procedures import ProcedureReferenceGenerator
from neodoc.settings.filters import SettingFilter, names_option, parse_bool_option
from neodoc.settings.registry import SettingsSourceError, build_registry

EX_OK = 0
EX_USAGE = 2

log = logging.getLogger("neodoc.cli")


def _warn_missing_option(name: str, example: str, default: str) -> str:
    print(f"    [x] No {name} provided ({example}), using default: '{default}'")
    return default


def _option_or_default(value: Optional[str], name: str, example: str, default: str) -> str:
    if value is not None:
        return value
    return _warn_missing_option(name, example, default)


def _print_option(option: str, text: str, default) -> None:
    if isinstance(default, bool):
        default = "true" if default else "false"
    print(f"    {option:<30}{text} [{default}]")


def write_document(doc: str, out_file: Optional[str]) -> None:
    if not out_file:
        print(doc)
        return
    out = Path(out_file)
    out.parent.mkdir(parents=True, exist_ok=True)
    print(f"Saving docs in '{out.resolve()}'.")
    out.write_text(doc, encoding="utf-8")


def _row_source(neo: Neo4jCfg, uri: str) -> Optional[RowSource]:
    if not uri:
        return None

    def _fetch(query: str):
        return fetch_rows(
            Neo4jInstance(uri, user=neo.user, password=neo.password, database=neo.database),
            query,
        )

    return _fetch


def _print_config_docs_usage(cfg: AppConfig) -> None:
    print("Usage: neodoc config-docs [--options] <out_file>")
    print(
        "    No options are mandatory but in most cases user will want to set "
        "--id, --id-prefix and --title."
    )
    print("    If no <out-file> is given prints to stdout.")
    print("Options:")
    _print_option("--id", "ID to use for settings summary", cfg.docs.id)
    _print_option(
        "--id-prefix", "ID to prepend to generated ID for each setting details", cfg.docs.id_prefix
    )
    _print_option("--title", "Title to use for settings summary", cfg.docs.title)
    print("Filter options:")
    _print_option("--deprecated", "Include deprecated settings", True)
    _print_option("--deprecated-only", "Include only deprecated settings", False)
    _print_option("--dynamic-only", "Include only dynamic settings", False)
    _print_option("--name=<name>", "Single setting by name", "")
    _print_option("--names=<name1>,<name2>", "Multiple settings by name", "")
    _print_option("--prefix=<prefix>", "All settings whose namespace match <prefix>", "")
    _print_option("--unsupported", "Include internal/unsupported settings", False)


def setting_filter_from_args(args) -> SettingFilter:
    return SettingFilter(
        name=args.name,
        names=names_option(args.names),
        prefix=args.prefix,
        dynamic_only=bool(args.dynamic_only),
        internal=parse_bool_option(args.internal),
        unsupported=bool(args.unsupported),
        deprecated=parse_bool_option(args.deprecated),
        deprecated_only=bool(args.deprecated_only),
    )


def cmd_config_docs(args) -> int:
    cfg: AppConfig = args.app_config
    _print_config_docs_usage(cfg)

    doc_id = _option_or_default(args.id, "ID", "--id=my-id", cfg.docs.id)
    title = _option_or_default(args.title, "title", "--title=my-title", cfg.docs.title)
    id_prefix = _option_or_default(
        args.id_prefix, "ID prefix", "--id-prefix=my-id-prefix", cfg.docs.id_prefix
    )
    setting_filter = setting_filter_from_args(args)

    print(f"[+++] id={doc_id}  title={title}  idPrefix={id_prefix}")

    sources = SourcesCfg(
        manifests=args.manifest or [],
        modules=args.settings_module or [],
        classes=args.settings_class or [],
    )
    if sources.is_empty():
        sources = cfg.sources

    try:
        registry = build_registry(sources.manifests, sources.modules, sources.classes)
        doc = ConfigDocsGenerator(registry).document(
            setting_filter,
            id=doc_id,
            title=title,
            id_prefix=id_prefix,
            target=args.output_format,
        )
    except SettingsSourceError:
        log.exception("Settings source could not be read; no documentation written")
        raise
    write_document(doc, args.out_file)
    return EX_OK


def _print_procedures_usage() -> None:
    print("Usage: neodoc procedures [--options] <out_file>")
    print("    No options are mandatory but in most cases user will want to set --id and --title.")
    print("    If no <out-file> is given prints to stdout.")
    print("Options:")
    _print_option("--id", "ID to use for procedures reference", procedures.DEFAULT_ID)
    _print_option("--title", "Title to use for procedures reference", procedures.DEFAULT_TITLE)
    _print_option(
        "--filter",
        "Filter to apply, for example '^db.index.explicit.*' to only include procedures in that namespace",
        "",
    )
    _print_option(
        "--edition",
        "Which Neo4j Edition to use. One of 'enterprise', 'community' or 'both'",
        procedures.DEFAULT_EDITION,
    )


def cmd_procedures(args) -> int:
    cfg: AppConfig = args.app_config
    _print_procedures_usage()

    doc_id = _option_or_default(args.id, "ID", "--id=my-id", procedures.DEFAULT_ID)
    title = _option_or_default(args.title, "title", "--title=my-title", procedures.DEFAULT_TITLE)
    edition = _option_or_default(
        args.edition, "edition", "--edition=community", procedures.DEFAULT_EDITION
    )
    print(f"[+++] id={doc_id}  title={title}")

    community = _row_source(cfg.neo4j, cfg.neo4j.community_uri)
    enterprise = _row_source(cfg.neo4j, cfg.neo4j.enterprise_uri)
    if edition == "both" and enterprise is None:
        log.warning("No enterprise server configured, documenting community procedures only")
        edition = "community"
    if (edition == "community" and community is None) or (
        edition == "enterprise" and enterprise is None
    ):
        print(f"No {edition} server configured (see [neo4j] in {args.config}).")
        return EX_USAGE

    doc = ProcedureReferenceGenerator(community, enterprise).document(
        doc_id, title, edition, args.filter
    )
    write_document(doc, args.out_file)
    return EX_OK


def cmd_functions(args) -> int:
    cfg: AppConfig = args.app_config
    uri = cfg.neo4j.enterprise_uri or cfg.neo4j.community_uri
    source = _row_source(cfg.neo4j, uri)
    if source is None:
        print(f"No server configured (see [neo4j] in {args.config}).")
        return EX_USAGE
    doc = FunctionReferenceGenerator(source).document()
    write_document(doc, args.out_file)
    return EX_OK


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="neodoc",
        description="AsciiDoc reference generators for Neo4j settings, procedures and functions",
    )
    p.add_argument(
        "--config",
        default=resolve_config_path(),
        help="Path to neodoc.toml (default: neodoc.toml)",
    )
    p.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: [logging] level from config, else INFO)",
    )

    sub = p.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("config-docs", help="Generate the configuration settings reference")
    s.add_argument("out_file", nargs="?", default=None)
    s.add_argument("--id", default=None, help="ID to use for settings summary")
    s.add_argument("--title", default=None, help="Title to use for settings summary")
    s.add_argument(
        "--id-prefix",
        dest="id_prefix",
        default=None,
        help="ID to prepend to generated ID for each setting details",
    )
    s.add_argument(
        "--deprecated",
        nargs="?",
        const="true",
        default=None,
        choices=["true", "false"],
        metavar="true|false",
        help="Include deprecated settings (use --deprecated=false to leave them out)",
    )
    s.add_argument(
        "--deprecated-only",
        dest="deprecated_only",
        action="store_true",
        help="Include only deprecated settings",
    )
    s.add_argument(
        "--dynamic-only",
        dest="dynamic_only",
        action="store_true",
        help="Include only dynamic settings",
    )
    s.add_argument(
        "--internal",
        default=None,
        choices=["true", "false"],
        metavar="true|false",
        help="--internal=false leaves internal settings out",
    )
    s.add_argument("--name", default=None, help="Single setting by name")
    s.add_argument("--names", default=None, help="Multiple settings by name, comma separated")
    s.add_argument("--prefix", default=None, help="All settings whose namespace match <prefix>")
    s.add_argument(
        "--unsupported",
        action="store_true",
        help="Include internal/unsupported settings",
    )
    s.add_argument(
        "--manifest",
        action="append",
        default=None,
        help="YAML settings manifest (repeatable)",
    )
    s.add_argument(
        "--settings-module",
        dest="settings_module",
        action="append",
        default=None,
        help="Python module exposing a SETTINGS list (repeatable)",
    )
    s.add_argument(
        "--settings-class",
        dest="settings_class",
        action="append",
        default=None,
        help="Settings class as <module>:<Class> (repeatable)",
    )
    s.add_argument(
        "--output-format",
        dest="output_format",
        choices=["html", "print"],
        default="html",
        help="Render references as links (html) or inline code (print)",
    )
    s.set_defaults(fn=cmd_config_docs)

    s = sub.add_parser("procedures", help="Generate the procedure reference from a running server")
    s.add_argument("out_file", nargs="?", default=None)
    s.add_argument("--id", default=None)
    s.add_argument("--title", default=None)
    s.add_argument("--edition", choices=["community", "enterprise", "both"], default=None)
    s.add_argument("--filter", default=None, help="Regex the procedure name must match")
    s.set_defaults(fn=cmd_procedures)

    s = sub.add_parser("functions", help="Generate the function reference from a running server")
    s.add_argument("out_file", nargs="?", default=None)
    s.set_defaults(fn=cmd_functions)

    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    args.app_config = ConfigStore(args.config).load()
    level = args.log_level or args.app_config.logging.level
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    return int(args.fn(args))


if __name__ == "__main__":
    raise SystemExit(main())
