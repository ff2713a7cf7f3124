"""
Pytest configuration and fixtures for lang-audit tests.

Fixtures build a small Laravel-style project in a temporary directory.
"""

import json
import logging
from pathlib import Path
from typing import Callable, Dict

import pytest
import structlog

from lang_audit.config import Settings

MESSAGES_PHP = """<?php

return [
    'greeting' => 'hi',
    'nested' => [
        'a' => 'x',
    ],
];
"""

AUTH_PHP = """<?php

return [
    'failed' => 'These credentials do not match our records.',
];
"""


@pytest.fixture
def write_files() -> Callable[[Path, Dict[str, str]], None]:
    """Write ``{relative path: content}`` below a root directory."""
    def _write(root: Path, files: Dict[str, str]) -> None:
        for relative, content in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")

    return _write


@pytest.fixture
def project(tmp_path: Path, write_files) -> Path:
    """Project with an ``en`` locale, a JSON catalog and some source files."""
    write_files(tmp_path, {
        "lang/en/messages.php": MESSAGES_PHP,
        "lang/en/auth.php": AUTH_PHP,
        "lang/en.json": json.dumps({"Welcome back": "Welcome back"}),
        "app/Http/Controllers/HomeController.php": (
            "<?php\n"
            "return view('home', ['title' => __('messages.greeting')]);\n"
        ),
        "resources/views/home.blade.php": (
            "<h1>{{ __('Welcome back') }}</h1>\n"
            "<p>{{ __('messages.nested.b') }}</p>\n"
        ),
    })
    return tmp_path


@pytest.fixture
def make_settings() -> Callable[..., Settings]:
    """Settings rooted at a project directory."""
    def _make(base_path: Path, **overrides) -> Settings:
        values = {"base_path": base_path, "max_workers": 2}
        values.update(overrides)
        return Settings(**values)

    return _make


@pytest.fixture
def settings(project: Path, make_settings) -> Settings:
    return make_settings(project)


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo setup_logging() so later tests do not log into a closed stream."""
    yield
    structlog.reset_defaults()
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
