"""Tests for locating corpus files."""

from pathlib import Path

import pytest

from lexcan.core.exceptions import CorpusNotFoundError
from lexcan.legislation.loader import LegislationLoader
from lexcan.legislation.models import Corpus, Language


def make_corpus_tree(root: Path) -> Path:
    for directory in ("eng/acts", "eng/regulations", "fra/lois", "fra/reglements"):
        (root / directory).mkdir(parents=True)

    (root / "eng/acts/A-1.xml").write_text("<Statute/>", encoding="utf-8")
    (root / "eng/acts/C-46.xml").write_text("<Statute/>", encoding="utf-8")
    (root / "eng/acts/README.md").write_text("not xml", encoding="utf-8")
    (root / "eng/regulations/SOR-86-946.xml").write_text("<Regulation/>", encoding="utf-8")
    (root / "fra/lois/A-1.xml").write_text("<Statute/>", encoding="utf-8")
    return root


def test_locate_returns_each_corpus(tmp_path):
    loader = LegislationLoader(make_corpus_tree(tmp_path))

    files = loader.locate()

    assert list(files) == list(Corpus)
    assert sorted(path.name for path in files[Corpus.ENGLISH_ACTS]) == ["A-1.xml", "C-46.xml"]
    assert [path.name for path in files[Corpus.ENGLISH_REGULATIONS]] == ["SOR-86-946.xml"]
    assert [path.name for path in files[Corpus.FRENCH_ACTS]] == ["A-1.xml"]
    assert files[Corpus.FRENCH_REGULATIONS] == []


def test_corpora_are_disjoint(tmp_path):
    files = LegislationLoader(make_corpus_tree(tmp_path)).locate()

    all_paths = [path for paths in files.values() for path in paths]
    assert len(all_paths) == len(set(all_paths))


def test_missing_directory_raises(tmp_path):
    make_corpus_tree(tmp_path)
    (tmp_path / "fra/reglements").rmdir()

    with pytest.raises(CorpusNotFoundError) as exc_info:
        LegislationLoader(tmp_path).locate()

    assert isinstance(exc_info.value, FileNotFoundError)
    assert exc_info.value.directory.endswith("reglements")


def test_missing_root_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        LegislationLoader(tmp_path / "nowhere").locate()


def test_locate_subset_of_corpora(tmp_path):
    (tmp_path / "eng/acts").mkdir(parents=True)

    files = LegislationLoader(tmp_path).locate([Corpus.ENGLISH_ACTS])

    assert list(files) == [Corpus.ENGLISH_ACTS]


def test_load_content_limit_and_languages(tmp_path):
    loader = LegislationLoader(make_corpus_tree(tmp_path))

    pairs = list(loader.load_content())
    assert len(pairs) == 4
    assert [corpus.language for _, corpus in pairs] == [
        Language.ENGLISH,
        Language.ENGLISH,
        Language.ENGLISH,
        Language.FRENCH,
    ]

    assert len(list(loader.load_content(limit=2))) == 2


def test_corpus_properties():
    assert Corpus.FRENCH_REGULATIONS.language == Language.FRENCH
    assert Corpus.FRENCH_REGULATIONS.kind == "regulations"
