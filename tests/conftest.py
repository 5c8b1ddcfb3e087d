import pytest

from cmdregistry.sources import MappingSource
from cmdregistry.store import TemplateStore, load


@pytest.fixture
def sample_pairs():
    return {
        "fix": "Fix: <ARG>",
        "review": "Review target: <ARG>",
        "plain": "# Plain\nNo placeholder here.",
    }


@pytest.fixture
def registry(sample_pairs):
    return load(MappingSource(sample_pairs))


@pytest.fixture
def store(sample_pairs):
    return TemplateStore(MappingSource(sample_pairs))


@pytest.fixture
def command_dir(tmp_path):
    root = tmp_path / "commands"
    (root / "git").mkdir(parents=True)
    (root / "fix.md").write_text("Fix: $ARGUMENTS", encoding="utf-8")
    (root / "review.md").write_text("# Review\n\nReview target: $ARGUMENTS\n", encoding="utf-8")
    (root / "git" / "commit.md").write_text("Commit with message: $ARGUMENTS", encoding="utf-8")
    (root / "notes.txt").write_text("ignored", encoding="utf-8")
    return root
