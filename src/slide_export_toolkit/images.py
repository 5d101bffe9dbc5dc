"""
Base64 PNG Repair

Figma Make sometimes saves PNG assets as base64 text. Static hosts then serve
the text with an image/png content type and the image breaks. This module
finds such files and rewrites them as binary PNG.
"""

import base64
import binascii
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

logger = logging.getLogger(__name__)

# Checked relative to the project root
ASSET_DIRS = (
    'public/assets',
    'src/assets',
    'build/assets',
)

# base64 of the first PNG signature bytes
BASE64_PNG_PREFIX = b'iVBORw0KGgo'
PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'

NOT_BASE64 = 'Not base64-encoded'


@dataclass
class FixResult:
    """Outcome of processing a single file."""
    path: Path
    processed: bool
    size: int = 0
    reason: Optional[str] = None

    @property
    def skipped(self) -> bool:
        return not self.processed and self.reason == NOT_BASE64

    @property
    def failed(self) -> bool:
        return not self.processed and not self.skipped


@dataclass
class FixSummary:
    """Totals for a project scan."""
    results: List[FixResult] = field(default_factory=list)
    missing_dirs: List[str] = field(default_factory=list)

    @property
    def decoded(self) -> int:
        return sum(1 for r in self.results if r.processed)

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.results if r.skipped)

    @property
    def errors(self) -> int:
        return sum(1 for r in self.results if r.failed)


def is_base64_png(path: Union[str, Path]) -> bool:
    """Check whether a file holds base64 text of a PNG instead of PNG bytes."""
    try:
        content = Path(path).read_bytes()
    except OSError as e:
        logger.debug("Cannot read %s: %s", path, e)
        return False
    return content.strip().startswith(BASE64_PNG_PREFIX)


def decode_base64(data: Union[str, bytes]) -> bytes:
    """Decode base64 text, ignoring all whitespace and missing padding.

    Raises:
        ValueError: if the text is not valid base64
    """
    if isinstance(data, str):
        data = data.encode('ascii', errors='replace')
    cleaned = re.sub(rb'\s', b'', data)
    try:
        return base64.b64decode(cleaned + b'=' * (-len(cleaned) % 4), validate=True)
    except binascii.Error as e:
        raise ValueError(f"Failed to decode base64: {e}") from e


def fix_png_file(path: Union[str, Path]) -> FixResult:
    """Rewrite a base64-encoded PNG file as binary PNG.

    Files that are already binary are skipped. If the decoded bytes are not a
    PNG the file is left untouched and the result carries the reason.
    """
    path = Path(path)
    if not is_base64_png(path):
        return FixResult(path=path, processed=False, reason=NOT_BASE64)

    try:
        binary = decode_base64(path.read_bytes())
    except (OSError, ValueError) as e:
        return FixResult(path=path, processed=False, reason=str(e))

    if not binary.startswith(PNG_SIGNATURE):
        return FixResult(path=path, processed=False, reason='Decoded content is not a valid PNG')

    try:
        path.write_bytes(binary)
    except OSError as e:
        return FixResult(path=path, processed=False, reason=str(e))
    return FixResult(path=path, processed=True, size=len(binary))


def find_png_files(directory: Union[str, Path]) -> List[Path]:
    """List *.png files directly inside a directory (not recursive)."""
    directory = Path(directory)
    if not directory.is_dir():
        return []
    return sorted(p for p in directory.iterdir() if p.is_file() and p.name.endswith('.png'))


def fix_project_images(project_root: Optional[Union[str, Path]] = None, verbose: bool = True) -> FixSummary:
    """Decode every base64-encoded PNG in the project's asset directories.

    Args:
        project_root: Project directory (default: current directory)
        verbose: Print per-directory and per-file progress

    Returns:
        FixSummary with one result per PNG file found
    """
    root = Path(project_root) if project_root is not None else Path.cwd()
    summary = FixSummary()

    if verbose:
        print(f"Scanning for base64-encoded PNG images in: {root}\n")

    for asset_dir in ASSET_DIRS:
        full_dir = root / asset_dir
        if not full_dir.is_dir():
            summary.missing_dirs.append(asset_dir)
            if verbose:
                print(f"Directory not found: {asset_dir}")
            continue

        if verbose:
            print(f"Checking: {asset_dir}")

        for png_file in find_png_files(full_dir):
            result = fix_png_file(png_file)
            summary.results.append(result)
            if not verbose:
                continue
            if result.processed:
                print(f"  Decoded: {png_file.name} ({result.size / 1024:.2f} KB)")
            elif result.failed:
                print(f"  Error: {png_file.name} - {result.reason}")

    return summary
