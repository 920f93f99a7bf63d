"""Pytest configuration and fixtures."""

import pytest

from src.domain.repository import Repository, parse_timestamp


def build_repo(
    name,
    stars=0,
    language=None,
    description=None,
    updated_at="2024-01-01T00:00:00Z",
    fork=False,
    **extra,
):
    return Repository(
        name=name,
        html_url=f"https://github.com/SaifDemos/{name}",
        updated_at=parse_timestamp(updated_at),
        description=description,
        language=language,
        stargazers_count=stars,
        fork=fork,
        **extra,
    )


def api_record(name, /, **overrides):
    """One record shaped like the GitHub REST listing."""
    record = {
        "name": name,
        "description": None,
        "language": None,
        "stargazers_count": 0,
        "forks_count": 0,
        "open_issues": 0,
        "watchers_count": 0,
        "updated_at": "2024-01-01T00:00:00Z",
        "html_url": f"https://github.com/SaifDemos/{name}",
        "fork": False,
    }
    record.update(overrides)
    return record


@pytest.fixture
def make_repo():
    return build_repo


@pytest.fixture
def make_record():
    return api_record


@pytest.fixture
def sample_repos():
    """A small account: mixed languages, a fork and a tie on stars."""
    return [
        build_repo("LabTool", stars=5, language="Go", description="small utility", updated_at="2024-03-01T10:00:00Z"),
        build_repo("xbox-mapper", stars=12, language="C", updated_at="2023-11-20T08:30:00Z"),
        build_repo("dotfiles", stars=5, language=None, description="Shell config", updated_at="2024-05-02T12:00:00Z"),
        build_repo("forked-lib", stars=40, language="Rust", fork=True, updated_at="2022-01-01T00:00:00Z"),
        build_repo("homelab", stars=1, language="Go", description="n8n + jellyfin", updated_at="2024-05-02T12:00:00Z"),
    ]
