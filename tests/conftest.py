# htmlgroups — grouped HTML template registry
# Copyright (C) 2024-2026 Dr Horst Herb
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""Shared fixtures: a small template tree on disk and inside a zip bundle."""

from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

TEMPLATE_FILES = {
    "header.html": "<header>{{ 'dev' if development else 'prod' }}</header>",
    "footer.html": "<footer>{% if use_local_files %}local{% else %}cdn{% endif %}</footer>",
    "notes.txt": "not a template",
    "report.html.bak": "{% if %}",
    "app/index.html": (
        '{% include "header.html" %}'
        "<main>app {{ injected_data.name }}</main>"
        '{% include "footer.html" %}'
    ),
    "app/users.html": "<ul>{% for u in injected_data %}<li>{{ u }}</li>{% endfor %}</ul>",
    "app/nested/deep.html": "nested",
    "docs/index.html": '{% include "header.html" %}<main>docs</main>',
    "help/readme.txt": "no templates here",
}

BUNDLE_PREFIX = "bundle/templates"


def write_tree(root: Path, files: dict[str, str]) -> Path:
    for rel, text in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root


def make_bundle(archive: Path, files: dict[str, str], prefix: str = BUNDLE_PREFIX) -> zipfile.Path:
    with zipfile.ZipFile(archive, "w") as zf:
        for rel, text in files.items():
            zf.writestr(f"{prefix}/{rel}", text)
    return zipfile.Path(archive)


@pytest.fixture
def template_dir(tmp_path):
    return write_tree(tmp_path / "templates", TEMPLATE_FILES)


@pytest.fixture
def bundle(tmp_path):
    return make_bundle(tmp_path / "bundle.zip", TEMPLATE_FILES)


@pytest.fixture
def bundle_factory(tmp_path):
    def _factory(files: dict[str, str], prefix: str = BUNDLE_PREFIX) -> zipfile.Path:
        return make_bundle(tmp_path / f"bundle-{len(list(tmp_path.glob('*.zip')))}.zip", files, prefix)

    return _factory
