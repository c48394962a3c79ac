"""Pytest configuration and shared fixtures for the latexfmt test suite.

This module provides shared fixtures, test configuration, and the
Hypothesis profiles used by the property-based tests.
"""

import os
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def sample_latex() -> str:
    """Provide a small LaTeX document touching most node types.

    Returns
    -------
    str
        Source text with environments, math, comments and verbatim content.

    """
    return (
        "\\documentclass[a4paper,12pt]{article}\n"
        "\\usepackage{amsmath}\n"
        "\n"
        "\\begin{document}\n"
        "Hello   world, this is $x^2$ and x_{y}.  % note\n"
        "\n"
        "\n"
        "\\begin{itemize}\n"
        "\\item first\n"
        "\\item second\n"
        "\\end{itemize}\n"
        "\\begin{verbatim}\n"
        "  keep    this\n"
        "\\end{verbatim}\n"
        "\\[ a + b \\]\n"
        "\\end{document}\n"
    )


@pytest.fixture
def latex_file(tmp_path: Path, sample_latex: str) -> Path:
    """Write :func:`sample_latex` to a temporary ``.tex`` file.

    Returns
    -------
    Path
        Path of the written file.

    """
    path = tmp_path / "sample.tex"
    path.write_text(sample_latex, encoding="utf-8")
    return path
