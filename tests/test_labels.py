"""Tests for the provider registry and label derivation."""

from weekly_digest.core import (
    PROVIDER_IDS,
    ChangeEntry,
    ProviderShape,
    ReleaseEntry,
    determine_labels,
    get_display_name,
    get_provider_info,
)
from weekly_digest.core.providers import strip_aws_prefix


def test_registry_contents() -> None:
    """Test the registered providers and their shapes."""
    assert PROVIDER_IDS == ("github", "aws", "claudeCode", "linear")
    assert get_provider_info("github").shape is ProviderShape.CATEGORIZED
    assert get_provider_info("aws").shape is ProviderShape.CATEGORIZED
    assert get_provider_info("claudeCode").shape is ProviderShape.SIMPLE
    assert get_provider_info("linear").shape is ProviderShape.SIMPLE
    assert get_display_name("github") == "GitHub Changelog"
    assert get_display_name("unknown") is None


def test_strip_aws_prefix() -> None:
    """Test removal of product prefixes."""
    assert strip_aws_prefix("amazon-s3") == "s3"
    assert strip_aws_prefix("aws-lambda") == "lambda"
    assert strip_aws_prefix("ec2") == "ec2"


def test_github_labels(github_entries: list[ChangeEntry]) -> None:
    """Test provider label plus prefixed sub-labels from active entries."""
    labels = determine_labels({"github": github_entries})

    # The muted deprecation entry contributes nothing
    assert labels == {"github", "gh:release", "gh:copilot", "gh:improvement"}


def test_aws_labels_are_transformed() -> None:
    """Test that AWS sub-labels drop product prefixes."""
    entries = [
        ChangeEntry(
            title="S3 update",
            url="https://aws.amazon.com/new/1",
            labels={"general:products": ["amazon-s3", "aws-lambda"]},
        )
    ]

    assert determine_labels({"aws": entries}) == {"aws", "aws:s3", "aws:lambda"}


def test_provider_without_prefix_gets_service_label_only(
    release_entries: list[ReleaseEntry],
) -> None:
    """Test providers without a sub-label prefix."""
    linear = [ChangeEntry(title="Cycles", url="https://linear.app/changelog/1", labels={"x": ["y"]})]

    labels = determine_labels({"claudeCode": release_entries, "linear": linear})

    assert labels == {"claude-code", "linear"}


def test_muted_only_and_unknown_providers_skipped() -> None:
    """Test that fully muted and unknown providers produce no labels."""
    muted = [ChangeEntry(title="Old", url="https://example.com", muted=True)]
    other = [ChangeEntry(title="X", url="https://example.com/x")]

    assert determine_labels({"github": muted, "unknown": other, "aws": []}) == set()


def test_service_only(github_entries: list[ChangeEntry]) -> None:
    """Test that service_only skips sub-labels."""
    assert determine_labels({"github": github_entries}, service_only=True) == {"github"}


def test_labels_are_deterministic(github_entries: list[ChangeEntry]) -> None:
    """Test that the same entries always yield the same labels."""
    first = determine_labels({"github": github_entries})
    second = determine_labels({"github": list(reversed(github_entries))})

    assert first == second
