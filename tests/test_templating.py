from __future__ import annotations

from pathlib import Path

import pytest
from jinja2 import UndefinedError

from contextgen.templating import create_environment, percent, render_template


@pytest.mark.parametrize(("value", "expected"), [(0.856, "86"), (0.6, "60"), (1.0, "100"), (0.0, "0")])
def test_percent_filter(value: float, expected: str) -> None:
    assert percent(value) == expected


def test_extra_directories_take_precedence(tmp_path: Path) -> None:
    (tmp_path / "prompt.txt.j2").write_text("custom {{ context_json }}", encoding="utf-8")

    env = create_environment([tmp_path])

    assert env.get_template("prompt.txt.j2").render(context_json="{}") == "custom {}"
    assert env.get_template("summary.md.j2") is not None


def test_missing_variables_fail_loudly() -> None:
    with pytest.raises(UndefinedError):
        render_template("prompt.txt.j2")
