import zipfile

import pytest

from index_engine.config import IndexSettings

CONTENT_TEMPLATE = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<office:document-content'
    ' xmlns:office="urn:oasis:names:tc:opendocument:xmlns:office:1.0"'
    ' xmlns:text="urn:oasis:names:tc:opendocument:xmlns:text:1.0"'
    ' xmlns:xlink="http://www.w3.org/1999/xlink" office:version="1.2">'
    '<office:body><office:text>{body}</office:text></office:body>'
    '</office:document-content>'
)

MOBY_BODY = (
    '<text:p text:style-name="P1">Call me '
    '<text:alphabetical-index-mark-start text:id="IMark1"/>Ishmael<text:alphabetical-index-mark-end text:id="IMark1"/>.</text:p>'
    '<text:soft-page-break/>'
    '<text:p text:style-name="P1">The '
    '<text:alphabetical-index-mark-start text:id="IMark2"/>whale<text:alphabetical-index-mark-end text:id="IMark2"/>'
    ' and <text:alphabetical-index-mark text:string-value="Ahab"/>the captain.</text:p>'
    '<text:p text:style-name="P1">Another '
    '<text:alphabetical-index-mark-start text:id="IMark3"/>Whale<text:alphabetical-index-mark-end text:id="IMark3"/>.</text:p>'
    '<text:p text:style-name="P2">[INDEX_HERE]</text:p>'
)

STYLES_XML = b'<?xml version="1.0" encoding="UTF-8"?><office:document-styles xmlns:office="urn:oasis:names:tc:opendocument:xmlns:office:1.0"/>'
MANIFEST_XML = b'<?xml version="1.0" encoding="UTF-8"?><manifest:manifest xmlns:manifest="urn:oasis:names:tc:opendocument:xmlns:manifest:1.0"/>'


def content_xml(body: str) -> str:
    return CONTENT_TEMPLATE.format(body=body)


def write_odt(path, body: str):
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr("mimetype", "application/vnd.oasis.opendocument.text", compress_type=zipfile.ZIP_STORED)
        zf.writestr("content.xml", content_xml(body), compress_type=zipfile.ZIP_DEFLATED)
        zf.writestr("styles.xml", STYLES_XML, compress_type=zipfile.ZIP_DEFLATED)
        zf.writestr("META-INF/manifest.xml", MANIFEST_XML, compress_type=zipfile.ZIP_DEFLATED)
    return path


@pytest.fixture
def settings():
    return IndexSettings(entry_paragraph_style="Entry", heading_paragraph_style="Heading")


@pytest.fixture
def moby_odt(tmp_path):
    return write_odt(tmp_path / "moby.odt", MOBY_BODY)


@pytest.fixture
def properties_file(tmp_path):
    p = tmp_path / "EbookIndexer.properties"
    p.write_text(
        "INDEX_ENTRY_PARAGRAPH_STYLE=Entry\n"
        "INDEX_HEADING_PARAGRAPH_STYLE=Heading\n",
        encoding="utf-8",
    )
    return p
