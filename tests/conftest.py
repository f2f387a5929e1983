from __future__ import annotations

from pathlib import Path

import pytest

from cargo_single.config import SingleConfig
from tests._fixtures.source_builder import SourceBuilder


@pytest.fixture
def source_builder(tmp_path: Path) -> SourceBuilder:
    """Provide a source builder rooted at the pytest tmp_path."""
    return SourceBuilder(tmp_path)


@pytest.fixture
def config(source_builder: SourceBuilder) -> SingleConfig:
    """Default settings rooted beside the written sources."""
    return SingleConfig(root=source_builder.path())


@pytest.fixture
def random_rs() -> str:
    return """\
        // rand = "0.7"

        use rand::Rng;

        fn main() {
            let n: u8 = rand::thread_rng().gen();
            println!("{}", n);
        }
        """
