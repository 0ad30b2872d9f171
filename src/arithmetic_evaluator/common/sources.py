"""Read arithmetic expressions from a text file or an archive."""
import lzma
from pathlib import Path
import tarfile
import tempfile
from typing import List
import zipfile

import py7zr


def read_source(path: Path) -> str:
    """
    Return the text of an expressions file.

    Plain ".txt" files are read directly; for archives the first ".txt" member is extracted.

    Supported archive formats:
    - .zip
    - .tar.xz
    - .7z

    :param Path path: Path to the text file or archive

    :return: File content
    :rtype: str
    :raises ValueError: If no .txt file is found, the archive is corrupt or the format is unsupported
    """
    if path.suffix == ".txt":
        return path.read_text(encoding="utf-8")

    try:
        return _extract_archive(path)
    except (zipfile.BadZipFile, tarfile.TarError, lzma.LZMAError, EOFError, py7zr.Bad7zFile) as exc:
        raise ValueError(f"📄❌ Corrupt archive: {path.name}") from exc


def _extract_archive(archive_path: Path) -> str:
    # Extract into a temporary directory, removed once the content is read
    with tempfile.TemporaryDirectory() as tmpdir:
        tmpdir_path = Path(tmpdir)

        if archive_path.suffix == ".zip":
            with zipfile.ZipFile(archive_path, "r") as zf:
                txt_files = [f for f in zf.namelist() if f.endswith(".txt")]
                if not txt_files:
                    raise ValueError("📄❌ No .txt file found in zip archive")
                zf.extract(txt_files[0], path=tmpdir_path)
                return (tmpdir_path / txt_files[0]).read_text(encoding="utf-8")

        if archive_path.suffixes[-2:] == [".tar", ".xz"]:
            with tarfile.open(archive_path, "r:xz") as tf:
                members = [m for m in tf.getmembers() if m.isfile() and m.name.endswith(".txt")]
                if not members:
                    raise ValueError("📄❌ No .txt file found in tar.xz archive")
                tf.extract(members[0], path=tmpdir_path, filter="data")
                return (tmpdir_path / members[0].name).read_text(encoding="utf-8")

        if archive_path.suffix == ".7z":
            with py7zr.SevenZipFile(archive_path, mode="r") as archive:
                txt_files = [f for f in archive.getnames() if f.endswith(".txt")]
                if not txt_files:
                    raise ValueError("📄❌ No .txt file found in 7z archive")
                archive.extract(path=tmpdir_path, targets=[txt_files[0]])
                return (tmpdir_path / txt_files[0]).read_text(encoding="utf-8")

        raise ValueError(f"📄❌ Unsupported file format: {''.join(archive_path.suffixes)}")


def split_expressions(content: str) -> List[str]:
    """
    Split file content into expressions, one per non-empty line.

    :param str content: Raw file content

    :return: Stripped, non-empty lines
    :rtype: List[str]
    """
    return [line.strip() for line in content.splitlines() if line.strip()]
