"""Integration tests for core utilities."""

import json
import logging

from bs4 import BeautifulSoup

from lexcan.core.models import LexModel
from lexcan.core.utils import load_xml_file_to_soup, set_logging_level, write_json_file


class Record(LexModel):
    id: str
    title: str | None = None
    body: str | None = None


class TestUtilsIntegration:
    """Integration tests for utils functions."""

    def test_set_logging_level_integration(self):
        """Test that logging level is actually set correctly."""
        set_logging_level(logging.DEBUG)

        test_logger = logging.getLogger("lexcan.test_module")
        assert test_logger.getEffectiveLevel() == logging.DEBUG

        set_logging_level(logging.WARNING)
        assert test_logger.getEffectiveLevel() == logging.WARNING

        set_logging_level(logging.INFO)

    def test_load_xml_file_integration(self, tmp_path):
        """Test XML file loading keeps namespaced attributes."""
        xml_content = """<?xml version="1.0" encoding="UTF-8"?>
<Statute xmlns:lims="http://justice.gc.ca/lims" lims:current-date="2024-01-15">
    <Identification>
        <ShortTitle>Loi sur l’accessibilité</ShortTitle>
    </Identification>
    <Body>
        <Section lims:id="7"><Label>1</Label></Section>
    </Body>
</Statute>"""
        path = tmp_path / "A-0.6.xml"
        path.write_text(xml_content, encoding="utf-8")

        soup = load_xml_file_to_soup(path)

        assert isinstance(soup, BeautifulSoup)
        assert soup.find("ShortTitle").text == "Loi sur l’accessibilité"
        assert soup.find("Statute").get("lims:current-date") == "2024-01-15"
        assert soup.find("Section").get("lims:id") == "7"

    def test_write_json_file_list(self, tmp_path):
        output = tmp_path / "nested" / "records.json"

        count = write_json_file(
            output,
            [Record(id="1", title="Loi", body="é"), Record(id="2")],
            exclude={"body"},
        )

        assert count == 2
        raw = output.read_text(encoding="utf-8")
        assert "é" not in raw
        assert json.loads(raw) == [{"id": "1", "title": "Loi"}, {"id": "2", "title": None}]

    def test_write_json_file_keeps_unicode(self, tmp_path):
        output = tmp_path / "record.json"

        count = write_json_file(output, Record(id="1", title="Règlement"))

        assert count == 1
        raw = output.read_text(encoding="utf-8")
        assert "Règlement" in raw
        assert json.loads(raw)["title"] == "Règlement"
