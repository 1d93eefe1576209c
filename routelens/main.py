import argparse
import logging
import os
import sys

from routelens import analyze_routes, routes_to_json
from routelens.context import AnalysisContext
from routelens.ingestion.github_loader import clone_repo, is_github_url
from routelens.symbolic.values import is_symbolic


class Color:
    RED     = '\033[91m'
    YELLOW  = '\033[93m'
    GREEN   = '\033[92m'
    CYAN    = '\033[96m'
    BOLD    = '\033[1m'
    RESET   = '\033[0m'


logger = logging.getLogger('routelens')

DEFAULT_ENTRY = 'app.js'


def configure_logging(debug: bool):
    # --debug or ROUTELENS_DEBUG=1 shows per-file and per-route detail
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        stream=sys.stderr,
    )


def count_symbolic(value) -> int:
    """Number of runtime-only placeholders inside an extracted value."""
    if is_symbolic(value):
        return 1
    if isinstance(value, dict):
        return sum(count_symbolic(v) for v in value.values())
    if isinstance(value, list):
        return sum(count_symbolic(v) for v in value)
    return 0


def analyze(entry_path: str) -> list:
    ctx = AnalysisContext(logger=logger)
    return analyze_routes(entry_path, ctx)


def print_summary(results):
    branches = sum(len(r.branches) for r in results)
    placeholders = 0
    for r in results:
        for detail in [r.default, *r.branches.values()]:
            placeholders += count_symbolic(detail.json) + count_symbolic(detail.send)

    methods = sorted({r.method for r in results})
    methods_str = ', '.join(methods) if methods else 'None'
    if len(methods_str) > 28:
        methods_str = methods_str[:25] + '...'

    width = 60
    out = sys.stderr

    def row(label, value, raw_value=None):
        value = str(value)
        display_len = len(raw_value) if raw_value else len(value)
        padding = width - len(label) - display_len - 4
        return f'{Color.CYAN}║{Color.RESET}  {label}{" " * padding}{value}  {Color.CYAN}║{Color.RESET}'

    routes_color = Color.GREEN if results else Color.YELLOW
    print('\n' + Color.CYAN + '╔' + '═' * width + '╗' + Color.RESET, file=out)
    print(Color.CYAN + '║' + Color.BOLD + 'ROUTELENS ANALYSIS COMPLETE'.center(width) + Color.RESET + Color.CYAN + '║' + Color.RESET, file=out)
    print(Color.CYAN + '╠' + '═' * width + '╣' + Color.RESET, file=out)
    print(row('Routes found:', routes_color + str(len(results)) + Color.RESET, raw_value=str(len(results))), file=out)
    print(row('Methods:', methods_str), file=out)
    print(row('Conditional branches:', branches), file=out)
    print(row('Symbolic placeholders:', placeholders), file=out)
    print(Color.CYAN + '╚' + '═' * width + '╝' + Color.RESET, file=out)


def write_output(results, out_path):
    payload = routes_to_json(results)
    if out_path:
        with open(out_path, 'w', encoding='utf-8') as f:
            f.write(payload + '\n')
        logger.info(f"Wrote {len(results)} routes to {out_path}")
    else:
        print(payload)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='routelens',
        description='Statically extract routes, request fields and response shapes from an Express app.',
    )
    parser.add_argument('target', help='entry file, project directory or GitHub URL')
    parser.add_argument('--entry', default=None,
                        help=f'entry file inside a directory or cloned repo (default: {DEFAULT_ENTRY})')
    parser.add_argument('--out', default=None, help='write the JSON here instead of stdout')
    parser.add_argument('--debug', action='store_true', help='verbose logging')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.debug or bool(os.environ.get('ROUTELENS_DEBUG')))

    cleanup = None
    try:
        if is_github_url(args.target):
            repo_path, cleanup = clone_repo(args.target)
            entry_path = os.path.join(repo_path, args.entry or DEFAULT_ENTRY)
        elif os.path.isdir(args.target):
            entry_path = os.path.join(args.target, args.entry or DEFAULT_ENTRY)
        else:
            entry_path = args.target

        results = analyze(entry_path)
    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        return 1
    finally:
        if cleanup is not None:
            cleanup()

    write_output(results, args.out)
    print_summary(results)
    return 0


if __name__ == "__main__":
    sys.exit(main())
