"""
Entry point for twinpane.
"""
import argparse
import curses
import dataclasses
import locale
import logging
import os

from . import __version__
from .core.app import Twinpane
from .core.bootstrap import prepare_environment, resolve_start_directory
from .core.config import default_config_path, load_config, save_config

# Ensure UTF-8
try:
    locale.setlocale(locale.LC_ALL, '')
except locale.Error:
    pass


def configure_logging(environ=None):
    """Enable debug logging when TWINPANE_DEBUG is set."""
    environ = os.environ if environ is None else environ
    if not environ.get('TWINPANE_DEBUG'):
        return False
    logging.basicConfig(
        level=logging.DEBUG,
        filename=environ.get('TWINPANE_LOG_FILE') or None,
        format='[%(levelname)s] %(name)s: %(message)s',
    )
    return True


def build_parser():
    parser = argparse.ArgumentParser(
        prog='twinpane',
        description='Keyboard-driven dual-pane file manager with an embedded console.',
    )
    parser.add_argument('--config', metavar='PATH', help='config file (default: %(default)s)',
                        default=str(default_config_path()))
    parser.add_argument('--show-hidden', action='store_true', help='show dotfiles at startup')
    parser.add_argument('--write-config', action='store_true',
                        help='write the effective config to --config and exit')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def run(config, start_dir):
    """Run twinpane and return process exit code."""
    def main(stdscr):
        Twinpane(stdscr, config=config, start_dir=start_dir).run()

    try:
        curses.wrapper(main)
        return 0
    except KeyboardInterrupt:
        return 130
    except Exception as e:
        # Top-level crash guard is intentionally broad to restore terminal state.
        try:
            curses.endwin()
        except curses.error:
            pass
        print(f'\nError: {e}')
        import traceback
        traceback.print_exc()
        return 1


def main_cli(argv=None):
    """Console script entrypoint."""
    args = build_parser().parse_args(argv)
    configure_logging()
    config = load_config(args.config)
    if args.show_hidden:
        config = dataclasses.replace(config, show_hidden=True)
    if args.write_config:
        print(save_config(config, args.config))
        return 0

    try:
        start_dir = resolve_start_directory()
    except SystemExit as exc:
        print(exc)
        return 1
    prepare_environment()
    return run(config, start_dir)


if __name__ == '__main__':
    raise SystemExit(main_cli())
