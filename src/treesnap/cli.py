import argparse
import logging
import sys
import textwrap
from functools import wraps
from pathlib import Path

from . import Processor, ReportSession, FormatError
from .settings import Settings, SettingsError, SETTING_CHECK_NAMES, SETTING_CONCURRENCY, \
    SETTING_LOGGING_LEVEL, SETTING_LOGGING_PATH
from .commands.format import format_error
from .utils.profiling import profile_main

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def needs_processor(func):
    """Decorator for commands that fingerprint files.

    The decorated function will receive (processor, settings, args).
    The wrapper function takes (settings, args) and creates the Processor.
    """
    @wraps(func)
    def wrapper(settings, args):
        with Processor(_concurrency(settings)) as processor:
            return func(processor, settings, args)
    return wrapper


def _concurrency(settings: Settings) -> int | None:
    """Read processing.concurrency as a positive integer. Integer strings such as "4" are accepted."""
    value = settings.get(SETTING_CONCURRENCY)
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        concurrency = value
    elif isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
        concurrency = int(value)
    else:
        concurrency = 0
    if concurrency < 1:
        raise SettingsError(f"{SETTING_CONCURRENCY} must be a positive integer, got {value!r}")
    return concurrency


def no_processor(func):
    """Decorator for commands that only read saved reports or file names.

    The decorated function will receive (settings, args).
    """
    @wraps(func)
    def wrapper(settings, args):
        return func(settings, args)
    return wrapper


@profile_main
def treesnap_main(argv=None):
    parser = argparse.ArgumentParser(
        prog='treesnap',
        description='Fingerprint the files of a directory tree into a report, find empty and duplicate files, and '
                    'compare reports to see which files were moved, modified, added or deleted.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent('''
            Examples:
              treesnap create /path/to/books -o books.json
              treesnap create /path/to/books --compare-with books.json
              treesnap compare books.json /path/to/books
            ''').strip()
    )
    parser.add_argument(
        '--config',
        metavar='PATH',
        help='Path to a TOML settings file. If not provided, uses TREESNAP_CONFIG environment variable.')
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Print every file as soon as it has been fingerprinted')
    parser.add_argument(
        '--log-file',
        metavar='PATH',
        help='Path to log file for operation logging. If not provided, uses logging.path from settings or no '
             'logging.')
    parser.add_argument(
        '--log-level',
        metavar='LEVEL',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Defaults to logging.level from settings or '
             'INFO.')
    subparsers = parser.add_subparsers(
        dest='command',
        title='Commands',
        description='Available commands',
        help='Use "treesnap COMMAND --help" for command-specific help',
        required=True
    )

    parser_create = subparsers.add_parser(
        'create',
        help='Create a report for a directory tree',
        description='Fingerprints every regular file under the directory, prints files with size 0 and files '
                    'sharing the same content, and optionally saves the report and compares it with an older one.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent('''
            Examples:
              treesnap create /home/user/books -o books.json
              treesnap create /home/user/books -o books.msgpack --check-names

            Reports ending with .msgpack are written in binary form, anything else as JSON.
            ''').strip())
    parser_create.add_argument(
        'directory',
        metavar='DIR',
        help='Directory to report')
    parser_create.add_argument(
        '-o', '--output',
        metavar='PATH',
        help='Save the report to this file')
    parser_create.add_argument(
        '--check-names',
        action=argparse.BooleanOptionalAction,
        default=None,
        help='Require file names of the form "Author - Title (YYYY).pdf" (or .djvu) and stop before '
             'fingerprinting if any name differs (default: create.check_names from settings, or off)')
    parser_create.add_argument(
        '--compare-with',
        metavar='REPORT',
        help='Compare the new report with an older saved report')
    parser_create.set_defaults(method=_create)

    parser_analyze = subparsers.add_parser(
        'analyze',
        help='Show files with size 0 and duplicate content in a saved report',
        description='Loads a saved report and prints files with size 0 and groups of files sharing content.')
    parser_analyze.add_argument(
        'report',
        metavar='REPORT',
        help='Saved report file')
    parser_analyze.set_defaults(method=_analyze)

    parser_compare = subparsers.add_parser(
        'compare',
        help='Compare two reports',
        description='Classifies the differences between an old and a new report as moved, modified, added or '
                    'deleted files. Either argument may be a directory, which is reported on the fly.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent('''
            Examples:
              treesnap compare old.json new.json
              treesnap compare old.json /home/user/books

            Files with the same content at a new path are reported as moved, even if another
            file took their old path. When several copies of the same content moved, the
            pairing of old and new paths follows path order and may not match the actual renames.
            ''').strip())
    parser_compare.add_argument(
        'old',
        metavar='OLD',
        help='Old report file or directory')
    parser_compare.add_argument(
        'new',
        metavar='NEW',
        help='New report file or directory')
    parser_compare.set_defaults(method=_compare)

    parser_check_names = subparsers.add_parser(
        'check-names',
        help='List files whose names are not valid book file names',
        description='Checks every file name under the directory against the "Author - Title (YYYY).ext" form. '
                    'Exits with status 2 if any name is invalid.')
    parser_check_names.add_argument(
        'directory',
        metavar='DIR',
        help='Directory to check')
    parser_check_names.set_defaults(method=_check_names)

    args = parser.parse_args(argv)

    settings = Settings(args.config)
    _configure_logging(args, settings)

    try:
        status = args.method(settings, args)
    except (OSError, FormatError, SettingsError) as e:
        logging.getLogger(__name__).error(f"{args.command} failed: {e}")
        print(format_error(e), end='', file=sys.stderr)
        status = 1

    return status


def _configure_logging(args, settings: Settings):
    log_file = args.log_file or settings.get(SETTING_LOGGING_PATH)
    if not log_file:
        return

    log_level = args.log_level or settings.get(SETTING_LOGGING_LEVEL) or 'INFO'

    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)

    logging.basicConfig(
        filename=str(log_file),
        level=getattr(logging, str(log_level).upper()),
        format=LOG_FORMAT
    )


@needs_processor
def _create(processor: Processor, settings: Settings, args):
    from .commands.create import do_create, CreateArgs

    check_names = args.check_names
    if check_names is None:
        check_names = bool(settings.get(SETTING_CHECK_NAMES, False))

    return do_create(ReportSession(processor), CreateArgs(
        directory=Path(args.directory),
        output=Path(args.output) if args.output else None,
        check_names=check_names,
        compare_with=Path(args.compare_with) if args.compare_with else None,
        verbose=args.verbose
    ))


@no_processor
def _analyze(settings: Settings, args):
    from .commands.compare import do_analyze

    return do_analyze(Path(args.report))


@needs_processor
def _compare(processor: Processor, settings: Settings, args):
    from .commands.compare import do_compare

    return do_compare(processor, Path(args.old), Path(args.new))


@no_processor
def _check_names(settings: Settings, args):
    from .commands.check_names import do_check_names

    return do_check_names(Path(args.directory))


def main():
    sys.exit(treesnap_main())


if __name__ == '__main__':
    main()
