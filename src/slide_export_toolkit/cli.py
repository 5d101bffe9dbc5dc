"""
Command Line Interface for Slide Export Toolkit

Provides entry points for:
- slide-export-pdf: Export a running presentation to PDF
- fix-base64-images: Decode base64-encoded PNG assets
- slide-export-init: Scan a project and write pdf-export.config.json
"""

import sys
import logging
import argparse
from pathlib import Path
from typing import Optional

from .browser import BrowserLaunchError
from .config import DEFAULT_CONFIG_FILENAME, load_config, save_config
from .export import DEFAULT_OUTPUT_DIR, run_export
from .images import fix_project_images
from .scan import build_config, scan_project
from .server import ServerUnavailableError


def export_command(args: argparse.Namespace) -> int:
    """Execute export command."""
    print("=" * 60)
    print("PDF Export (screenshot-based)")
    print("=" * 60)

    config_path = Path(args.config) if args.config else Path.cwd() / DEFAULT_CONFIG_FILENAME
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        print(f"Error: Configuration file not found: {config_path}")
        print("   Create it first: slide-export init")
        return 1
    except ValueError as e:
        print(f"Error: Failed to load configuration: {e}")
        return 1
    print(f"Configuration loaded: {config.total_slides} slides\n")

    try:
        result = run_export(config, args.output_dir)
    except ServerUnavailableError as e:
        print("Error: Dev server is not running!")
        print(f"   Expected URL: {e.url}")
        print("   Please run: npm run dev")
        print("   Then in another terminal run: slide-export export")
        return 1
    except BrowserLaunchError as e:
        print(f"Error: {e}")
        return 1
    except Exception as e:
        print(f"\nExport failed: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1

    print("\nPDF exported successfully!")
    print(f"Location: {result.pdf_path}")
    print(f"Total pages: {result.page_count}")
    print(f"Screenshots saved in: {result.screenshot_dir}")
    return 0


def fix_images_command(args: argparse.Namespace) -> int:
    """Execute fix-images command."""
    summary = fix_project_images(args.root)

    print("\nSummary:")
    print(f"   Decoded: {summary.decoded}")
    print(f"   Skipped (already binary): {summary.skipped}")
    print(f"   Errors: {summary.errors}")

    if summary.decoded > 0:
        print(f"\nSuccessfully decoded {summary.decoded} image(s)!")
    else:
        print("\nNo base64-encoded images found. All images are already binary.")
    return 0


def init_command(args: argparse.Namespace) -> int:
    """Execute init command."""
    print("=" * 60)
    print("PDF Export Setup")
    print("=" * 60)

    root = Path(args.root)
    output_path = root / DEFAULT_CONFIG_FILENAME
    if output_path.exists() and not args.force:
        print(f"Error: {output_path} already exists. Use --force to overwrite.")
        return 1

    try:
        scan = scan_project(root)
    except FileNotFoundError as e:
        print(f"Error: {e}")
        return 1

    dev_server_url = scan.dev_server_url
    total_slides = scan.total_slides
    hide_ui = True
    include_sub_slides = True

    if args.interactive:
        print("\nConfiguration Questions:\n")
        dev_server_url = _ask(f"Dev server URL [{scan.dev_server_url}]: ") or scan.dev_server_url
        answer = _ask(f"Total number of slides [{scan.total_slides}]: ")
        if answer:
            try:
                total_slides = int(answer)
            except ValueError:
                print(f"Error: Not a number: {answer}")
                return 1
        include_sub_slides = _ask_yes_no("Confirm detected sub-slides?")
        hide_ui = _ask_yes_no("Hide UI elements (header, nav, progress bar) in PDF?")

    if total_slides <= 0:
        print("Error: Slide count could not be detected. Run with --interactive to enter it.")
        return 1

    config = build_config(
        scan,
        dev_server_url=dev_server_url,
        total_slides=total_slides,
        hide_ui_elements=hide_ui,
        include_sub_slides=include_sub_slides,
    )
    save_config(config, output_path)
    print(f"\nConfiguration saved to: {output_path}")
    if not include_sub_slides:
        print("You can edit slidesWithSubSlides in the configuration file manually.")

    print("\nNext steps:")
    print("1. Start your dev server: npm run dev")
    print("2. In another terminal, run: slide-export export")
    print(f"3. PDF will be saved to: {DEFAULT_OUTPUT_DIR}/presentation.pdf")
    return 0


def _ask(prompt: str) -> str:
    return input(prompt).strip()


def _ask_yes_no(question: str, default: bool = True) -> bool:
    hint = 'y' if default else 'n'
    answer = _ask(f"{question} (y/n) [{hint}]: ").lower()
    if not answer:
        return default
    return answer == 'y'


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description='Slide Export Toolkit - PDF export and asset fixes for Figma Make presentations',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s init --interactive
  %(prog)s export --config pdf-export.config.json
  %(prog)s fix-images path/to/project
        """
    )

    parser.add_argument('-v', '--verbose', action='store_true', help='Show detailed output')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Export command
    export_parser = subparsers.add_parser('export', help='Export the running presentation to PDF')
    export_parser.add_argument('--config', '-c', help=f'Configuration file (default: ./{DEFAULT_CONFIG_FILENAME})')
    export_parser.add_argument('--output-dir', '-o', help=f'Output directory (default: ./{DEFAULT_OUTPUT_DIR})')
    export_parser.add_argument('-v', '--verbose', action='store_true', default=argparse.SUPPRESS, help='Show detailed output')

    # Fix-images command
    fix_parser = subparsers.add_parser('fix-images', help='Decode base64-encoded PNG assets')
    fix_parser.add_argument('root', nargs='?', default='.', help='Project root (default: current directory)')
    fix_parser.add_argument('-v', '--verbose', action='store_true', default=argparse.SUPPRESS, help='Show detailed output')

    # Init command
    init_parser = subparsers.add_parser('init', help='Scan the project and write the export configuration')
    init_parser.add_argument('root', nargs='?', default='.', help='Project root (default: current directory)')
    init_parser.add_argument('--interactive', '-i', action='store_true', help='Confirm detected values interactively')
    init_parser.add_argument('--force', '-f', action='store_true', help='Overwrite an existing configuration')
    init_parser.add_argument('-v', '--verbose', action='store_true', default=argparse.SUPPRESS, help='Show detailed output')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == 'export':
        return export_command(args)
    elif args.command == 'fix-images':
        return fix_images_command(args)
    elif args.command == 'init':
        return init_command(args)
    else:
        parser.print_help()
        return 1


# Entry points for direct script execution
def slide_export_pdf():
    """Entry point for slide-export-pdf command."""
    sys.exit(main(['export'] + sys.argv[1:]))


def fix_base64_images():
    """Entry point for fix-base64-images command."""
    sys.exit(main(['fix-images'] + sys.argv[1:]))


def slide_export_init():
    """Entry point for slide-export-init command."""
    sys.exit(main(['init'] + sys.argv[1:]))


if __name__ == '__main__':
    sys.exit(main())
