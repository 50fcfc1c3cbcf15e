"""Reading and rewriting content.xml inside an OpenDocument (.odt) zip."""
import logging
import os
import tempfile
import zipfile
from pathlib import Path
from typing import Union

from lxml import etree as LET

from .errors import ArchiveError, OutputValidationError

logger = logging.getLogger(__name__)

CONTENT_MEMBER = "content.xml"
MIMETYPE_MEMBER = "mimetype"

PathLike = Union[str, Path]


def default_output_path(source: PathLike) -> Path:
    """book.odt -> book.odt.indexed.odt"""
    source = Path(source)
    return source.with_name(source.name + ".indexed.odt")

def read_content_xml(odt_path: PathLike) -> str:
    try:
        with zipfile.ZipFile(odt_path) as zf:
            raw = zf.read(CONTENT_MEMBER)
    except KeyError:
        raise ArchiveError(f"{odt_path}: archive has no {CONTENT_MEMBER}") from None
    except (zipfile.BadZipFile, OSError) as e:
        raise ArchiveError(f"{odt_path}: cannot read archive: {e}") from e
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ArchiveError(f"{odt_path}: {CONTENT_MEMBER} is not UTF-8: {e}") from e

def check_well_formed(xml: str) -> None:
    """Parse strictly with lxml; the rewritten document must still be XML."""
    parser = LET.XMLParser(recover=False, huge_tree=True, resolve_entities=False)
    try:
        LET.fromstring(xml.encode("utf-8"), parser=parser)
    except LET.XMLSyntaxError as e:
        raise OutputValidationError(f"indexed content.xml is not well-formed: {e}") from e

def write_content_xml(source: PathLike, target: PathLike, xml: str) -> Path:
    """
    Copy every member of source into target, swapping in xml as content.xml.
    mimetype goes first and uncompressed so the result is still a valid ODF package.
    """
    source, target = Path(source), Path(target)
    fd, tmp = tempfile.mkstemp(prefix=target.name + ".", suffix=".tmp", dir=target.parent)
    os.close(fd)
    try:
        with zipfile.ZipFile(source) as zin, zipfile.ZipFile(tmp, "w") as zout:
            infos = zin.infolist()
            infos.sort(key=lambda i: i.filename != MIMETYPE_MEMBER)
            for info in infos:
                if info.filename == MIMETYPE_MEMBER:
                    zout.writestr(info, zin.read(info), compress_type=zipfile.ZIP_STORED)
                elif info.filename == CONTENT_MEMBER:
                    zout.writestr(info, xml.encode("utf-8"), compress_type=zipfile.ZIP_DEFLATED)
                else:
                    zout.writestr(info, zin.read(info))
        os.replace(tmp, target)
    except (zipfile.BadZipFile, OSError) as e:
        raise ArchiveError(f"{source}: cannot write indexed copy to {target}: {e}") from e
    finally:
        if os.path.exists(tmp):
            os.remove(tmp)
    logger.debug("wrote %s (%d chars of content.xml)", target, len(xml))
    return target
