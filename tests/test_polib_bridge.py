"""Tests for the polib conversion layer."""
import polib


def _catalog(fixtures_dir):
    from linguapo.po import load
    return load(fixtures_dir / "test.po")


class TestToPolib:
    def test_metadata(self, fixtures_dir):
        from linguapo.services.polib_bridge import to_polib
        po = to_polib(_catalog(fixtures_dir))
        assert po.metadata["Language"] == "sv"
        assert po.metadata["Plural-Forms"] == "nplurals=2; plural=(n != 1);"
        assert po.metadata_is_fuzzy
        assert po.header == (
            "Swedish translation for the demo application.\n"
            "Copyright (C) 2024 The Demo Authors\n"
        )

    def test_entries(self, fixtures_dir):
        from linguapo.services.polib_bridge import to_polib
        po = to_polib(_catalog(fixtures_dir))
        assert len(po) == 8
        assert po.find("File", msgctxt="menu").msgstr == "Arkiv"
        hello = po.find("Hello")
        assert hello.occurrences == [
            ("src/main.py", "12"), ("src/start.py", "4"), ("src/other.py", "40"),
        ]
        assert hello.comment == "Greeting shown on the start page"
        welcome = po.find("Welcome")
        assert welcome.flags == ["fuzzy", "python-format"]
        assert welcome.previous_msgid == "Welcome!"

    def test_plural(self, fixtures_dir):
        from linguapo.services.polib_bridge import to_polib
        entry = to_polib(_catalog(fixtures_dir)).find("One file")
        assert entry.msgid_plural == "%d files"
        assert entry.msgstr_plural == {0: "En fil", 1: "%d filer"}

    def test_statistics_agree(self, fixtures_dir):
        from linguapo.services.polib_bridge import to_polib
        catalog = _catalog(fixtures_dir)
        po = to_polib(catalog)
        assert len(po.translated_entries()) == catalog.translated_count
        assert len(po.untranslated_entries()) == catalog.untranslated_count
        assert len(po.fuzzy_entries()) == catalog.fuzzy_count
        assert len(po.obsolete_entries()) == 1

    def test_header_line_without_colon_dropped(self, caplog):
        from linguapo.parsers.messages import Catalog
        from linguapo.services.polib_bridge import to_polib
        catalog = Catalog(headers=["Language: de", "garbage"])
        po = to_polib(catalog)
        assert dict(po.metadata) == {"Language": "de"}
        assert "garbage" in caplog.text


class TestFromPolib:
    def test_pofile(self, fixtures_dir):
        from linguapo.parsers.messages import Plural
        from linguapo.services.polib_bridge import from_polib
        po = polib.pofile(str(fixtures_dir / "test.po"))
        catalog = from_polib(po)
        assert catalog.header_value("Language") == "sv"
        assert catalog.find("Hello").msgstr == ["Hej"]
        assert catalog.find("File", "menu").comments == ["Menu entry"]
        plural = catalog.find("One file")
        assert isinstance(plural, Plural)
        assert plural.msgstr == {0: ["En fil"], 1: ["%d filer"]}
        assert [m.msgid_text for m in catalog.obsolete_messages] == ["Hello"]

    def test_agrees_with_parser(self, fixtures_dir):
        from linguapo.services.polib_bridge import from_polib
        ours = _catalog(fixtures_dir)
        theirs = from_polib(polib.pofile(str(fixtures_dir / "test.po")))
        assert sorted((m.key() for m in theirs.messages), key=repr) == sorted(
            (m.key() for m in ours.messages), key=repr)
        assert theirs.translated_count == ours.translated_count
        assert theirs.headers == ours.headers

    def test_round_trip(self, fixtures_dir):
        from linguapo.services.polib_bridge import from_polib, to_polib
        catalog = _catalog(fixtures_dir)
        back = from_polib(to_polib(catalog), file="back.po")
        assert back.file == "back.po"
        assert [m.msgid_text for m in back.messages] == [m.msgid_text for m in catalog.messages]
        assert [m.obsolete for m in back.messages] == [m.obsolete for m in catalog.messages]
        assert back.find("Welcome").previous_msgid == ["Welcome!"]
        assert back.find("Hello").references == [
            ["src/main.py:12", "src/start.py:4", "src/other.py:40"],
        ]
        assert "#, fuzzy" in back.top_comments

    def test_reference_without_line(self):
        from linguapo.services.polib_bridge import entry_from_polib, entry_to_polib
        from linguapo.parsers.messages import Singular
        entry = entry_to_polib(Singular(msgid=["a"], references=[["README"]]))
        assert entry.occurrences == [("README", "")]
        assert entry_from_polib(entry).references == [["README"]]
