"""
Unit tests for data models and configuration.
"""

import logging
from logging.handlers import RotatingFileHandler

import pytest
from datetime import datetime, timezone, timedelta
from pydantic import ValidationError

from pr_changelog.models.pull_request import PullRequestInfo, PullRequestRequest
from pr_changelog.models.configuration import (
    Category,
    Transformer,
    CategoryRequest,
    ChangelogConfigRequest,
)
from pr_changelog.models.changelog import CategoryBucket, ClassificationResult, CompileOutcome
from pr_changelog.changelog.ordering import is_ascending
from pr_changelog.config import (
    AppConfig,
    ChangelogConfig,
    ConfigError,
    ConfigManager,
    DEFAULT_PR_TEMPLATE,
    DEFAULT_SORT,
    DEFAULT_TEMPLATE,
)


class TestPullRequestModels:
    """Unit tests for pull request data models."""

    def test_pull_request_creation(self):
        """Test PullRequestInfo creation with defaults."""
        pr = PullRequestInfo(
            number=42,
            title="Fix bug",
            html_url="https://github.com/org/repo/pull/42",
            merged_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
            author="alice",
        )

        assert pr.number == 42
        assert pr.labels == []
        assert pr.assignees == []
        assert pr.requested_reviewers == []
        assert pr.body == ""
        assert pr.milestone is None

    def test_naive_merged_at_is_utc(self):
        """Test that naive timestamps are taken as UTC."""
        pr = PullRequestInfo(
            number=1,
            title="t",
            html_url="u",
            merged_at=datetime(2024, 1, 1, 12, 0),
            author="a",
        )

        assert pr.merged_at.tzinfo == timezone.utc
        assert pr.merged_at.hour == 12

    def test_pull_request_validation(self):
        """Test PullRequestInfo validation rules."""
        with pytest.raises(ValueError):
            PullRequestInfo(
                number=0,
                title="t",
                html_url="u",
                merged_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
                author="a",
            )

        with pytest.raises(ValueError):
            PullRequestInfo(number=1, title="t", html_url="u", merged_at="2024-01-01", author="a")

    def test_none_collections_become_empty(self):
        """Test that absent optional collections are normalized."""
        pr = PullRequestInfo(
            number=3,
            title="t",
            html_url="u",
            merged_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
            author="a",
            labels=None,
            body=None,
            assignees=None,
            requested_reviewers=None,
        )

        assert pr.labels == []
        assert pr.body == ""
        assert pr.assignees == []
        assert pr.requested_reviewers == []

    def test_pull_request_request_conversion(self):
        """Test PullRequestRequest validation and conversion."""
        request = PullRequestRequest(
            number=7,
            title="Add feature",
            html_url="https://example.com/7",
            merged_at="2024-03-01T10:00:00+02:00",
            author="bob",
            labels=["feature"],
            body=None,
            assignees=None,
        )

        pr = request.to_pull_request()
        assert pr.number == 7
        assert pr.labels == ["feature"]
        assert pr.body == ""
        assert pr.assignees == []
        assert pr.merged_at.utcoffset() == timedelta(hours=2)

    def test_pull_request_request_rejects_bad_number(self):
        """Test PullRequestRequest number validation."""
        with pytest.raises(ValidationError):
            PullRequestRequest(
                number=-1,
                title="t",
                html_url="u",
                merged_at="2024-01-01T00:00:00Z",
                author="a",
            )


class TestConfigurationModels:
    """Unit tests for categories and transformers."""

    def test_category_matches_on_intersection(self):
        """Test Category label intersection."""
        category = Category(title="Fixes", labels=["bug", "fix"])

        assert category.matches(["fix", "docs"])
        assert not category.matches(["feature"])
        assert not category.matches([])

    def test_category_requires_labels(self):
        """Test that a category without labels is rejected."""
        with pytest.raises(ValueError):
            Category(title="Empty", labels=[])

        with pytest.raises(ValidationError):
            CategoryRequest(title="Empty", labels=[])

    def test_transformer_default_target(self):
        """Test that a transformer without target deletes matches."""
        assert Transformer(pattern="x").target == ""

    def test_changelog_config_request_keeps_sort_verbatim(self):
        """Test that padded sort tokens are not normalized into ASC."""
        assert ChangelogConfigRequest(sort="  asc ").sort == "  asc "
        assert ChangelogConfigRequest().sort is None

        config = AppConfig.from_dict({'sort': ' asc '})

        assert config.changelog.sort == ' asc '
        assert not is_ascending(config.changelog.sort)


class TestChangelogModels:
    """Unit tests for intermediate changelog values."""

    def test_compile_outcome_ok(self):
        """Test CompileOutcome status."""
        assert not CompileOutcome(source="(", error="missing )").ok

    def test_classification_result_helpers(self):
        """Test bucket helpers on ClassificationResult."""
        bugs = CategoryBucket(category=Category(title="Bugs", labels=["bug"]), entries=["a", "b"])
        docs = CategoryBucket(category=Category(title="Docs", labels=["docs"]))
        result = ClassificationResult(buckets=[bugs, docs], uncategorized=["c"])

        assert result.non_empty_buckets == [bugs]
        assert result.categorized_count == 2
        assert docs.is_empty


class TestConfig:
    """Unit tests for configuration loading and validation."""

    def test_defaults(self):
        """Test default changelog settings."""
        config = ChangelogConfig()

        assert config.sort == DEFAULT_SORT == "DESC"
        assert config.template == DEFAULT_TEMPLATE
        assert config.pr_template == DEFAULT_PR_TEMPLATE
        assert config.categories == []
        assert config.transformers == []

    def test_from_dict_flat_layout(self):
        """Test the flat configuration layout."""
        config = AppConfig.from_dict({
            'sort': 'ASC',
            'pr_template': '- ${{TITLE}}',
            'categories': [{'title': 'Bugs', 'labels': ['bug']}],
            'transformers': [{'pattern': 'a', 'target': 'b'}],
        })

        assert config.changelog.sort == 'ASC'
        assert config.changelog.pr_template == '- ${{TITLE}}'
        assert config.changelog.template == DEFAULT_TEMPLATE
        assert config.changelog.categories == [Category(title='Bugs', labels=['bug'])]
        assert config.changelog.transformers == [Transformer(pattern='a', target='b')]

    def test_from_dict_nested_layout(self):
        """Test the nested configuration layout with logging section."""
        config = AppConfig.from_dict({
            'changelog': {'sort': 'asc', 'template': '${{CHANGELOG}}'},
            'logging': {'level': 'DEBUG'},
            'debug': True,
        })

        assert config.changelog.sort == 'asc'
        assert config.changelog.template == '${{CHANGELOG}}'
        assert config.logging.level == 'DEBUG'
        assert config.debug is True

    def test_from_dict_empty(self):
        """Test that an empty document yields defaults."""
        config = AppConfig.from_dict(None)

        assert config.changelog == ChangelogConfig()
        assert config.debug is False

    def test_from_dict_rejects_category_without_labels(self):
        """Test boundary validation of categories."""
        with pytest.raises(ConfigError):
            AppConfig.from_dict({'categories': [{'title': 'Bugs', 'labels': []}]})

    def test_from_dict_rejects_non_mapping(self):
        """Test that the configuration root must be a mapping."""
        with pytest.raises(ConfigError):
            AppConfig.from_dict(["sort", "ASC"])

    def test_from_yaml(self, tmp_path):
        """Test loading from a YAML file."""
        config_file = tmp_path / "changelog.yml"
        config_file.write_text(
            'sort: ASC\n'
            'template: "${{CHANGELOG}}\\n${{UNCATEGORIZED}}"\n'
            'categories:\n'
            '  - title: "## Features"\n'
            '    labels: [feature, enhancement]\n'
            'transformers:\n'
            '  - pattern: "\\\\[(\\\\d+)\\\\]"\n'
            '    target: "#$1"\n',
            encoding='utf-8',
        )

        config = AppConfig.from_yaml(str(config_file))

        assert config.changelog.sort == 'ASC'
        assert config.changelog.template == '${{CHANGELOG}}\n${{UNCATEGORIZED}}'
        assert config.changelog.categories[0].labels == ['feature', 'enhancement']
        assert config.changelog.transformers[0].pattern == '\\[(\\d+)\\]'
        assert config.changelog.transformers[0].target == '#$1'

    def test_from_yaml_accepts_json(self, tmp_path):
        """Test that JSON configuration files load as well."""
        config_file = tmp_path / "changelog.json"
        config_file.write_text('{"sort": "DESC", "categories": [{"title": "Bugs", "labels": ["bug"]}]}')

        config = AppConfig.from_yaml(str(config_file))

        assert config.changelog.categories[0].title == 'Bugs'

    def test_from_yaml_missing_file(self, tmp_path):
        """Test missing configuration file."""
        with pytest.raises(FileNotFoundError):
            AppConfig.from_yaml(str(tmp_path / "missing.yml"))

    def test_from_yaml_invalid_yaml(self, tmp_path):
        """Test unparsable configuration file."""
        config_file = tmp_path / "broken.yml"
        config_file.write_text("sort: [unclosed\n")

        with pytest.raises(ConfigError):
            AppConfig.from_yaml(str(config_file))

    def test_from_env(self, monkeypatch):
        """Test loading settings from environment variables."""
        monkeypatch.setenv("CHANGELOG_SORT", "asc")
        monkeypatch.setenv("CHANGELOG_PR_TEMPLATE", "* ${{TITLE}}")
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        monkeypatch.setenv("DEBUG", "true")

        config = AppConfig.from_env()

        assert config.changelog.sort == "asc"
        assert config.changelog.pr_template == "* ${{TITLE}}"
        assert config.changelog.template == DEFAULT_TEMPLATE
        assert config.logging.level == "WARNING"
        assert config.debug is True

    def test_validate_log_level(self):
        """Test validation errors are collected."""
        config = AppConfig()
        config.logging.level = "LOUD"
        config.logging.backup_count = -1

        with pytest.raises(ValueError) as exc_info:
            config.validate()

        assert "Invalid log level: LOUD" in str(exc_info.value)
        assert "backup count" in str(exc_info.value)

    def test_to_dict_round_trip(self):
        """Test that to_dict output loads back into the same settings."""
        config = AppConfig.from_dict({
            'sort': 'ASC',
            'categories': [{'title': 'Bugs', 'labels': ['bug', 'fix']}],
            'transformers': [{'pattern': 'x', 'target': 'y'}],
        })

        assert AppConfig.from_dict(config.to_dict()) == config

    def test_config_manager_update(self):
        """Test nested setting updates through ConfigManager."""
        manager = ConfigManager(AppConfig())

        manager.update_config(**{'changelog.sort': 'ASC'})

        assert manager.config.changelog.sort == 'ASC'
        assert manager.config.changelog.template == DEFAULT_TEMPLATE

    def test_config_manager_keeps_one_file_handler(self, tmp_path):
        """Test that repeated updates do not stack file handlers."""
        log_file = str(tmp_path / "changelog.log")
        config = AppConfig()
        config.logging.file_path = log_file
        root_logger = logging.getLogger()

        def file_handlers():
            return [
                h for h in root_logger.handlers
                if isinstance(h, RotatingFileHandler) and h.baseFilename == log_file
            ]

        manager = ConfigManager(config)
        try:
            manager.update_config(**{'changelog.sort': 'ASC'})
            manager.update_config(**{'changelog.sort': 'DESC'})

            assert len(file_handlers()) == 1
        finally:
            for handler in file_handlers():
                root_logger.removeHandler(handler)
                handler.close()
