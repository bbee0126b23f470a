"""Tests for trait composition and the discovery context."""

from typing import ClassVar

import pytest

from git_source.core.models.head import Head
from git_source.core.models.scm import GitExtension, RepositoryBrowser
from git_source.git.refspec import REF_SPEC_DEFAULT, REF_SPEC_TAGS
from git_source.traits.base import SourceTrait
from git_source.traits.builtin import (
    BranchDiscoveryTrait,
    BrowserTrait,
    ExtensionTrait,
    GitToolTrait,
    IgnorePushNotificationsTrait,
    RefSpecsTrait,
    RemoteNameTrait,
    TagDiscoveryTrait,
    WildcardFilterTrait,
    wildcard_pattern,
)
from git_source.traits.composer import TraitComposer, as_set_list
from git_source.traits.context import DiscoveryContext


APPLIED: list[str] = []


class RecordingTrait(SourceTrait):
    """Records the order traits are applied in."""

    kind: ClassVar[str] = "recording"

    label: str

    @property
    def identity(self):
        return (type(self), self.label)

    def decorate_context(self, context: DiscoveryContext) -> None:
        APPLIED.append(self.label)


@pytest.fixture
def composer() -> TraitComposer:
    return TraitComposer()


@pytest.mark.unit
class TestAsSetList:
    """Tests for identity-based de-duplication."""

    def test_later_trait_wins_in_first_position(self) -> None:
        first = WildcardFilterTrait(includes="main")
        second = WildcardFilterTrait(includes="dev")
        result = as_set_list([first, BranchDiscoveryTrait(), second])
        assert result == (second, BranchDiscoveryTrait())

    def test_none_entries_skipped(self) -> None:
        assert as_set_list([None, BranchDiscoveryTrait(), None]) == (BranchDiscoveryTrait(),)

    def test_extensions_unique_per_type(self) -> None:
        clean = ExtensionTrait(extension=GitExtension(type="clean_before_checkout"))
        prune = ExtensionTrait(extension=GitExtension(type="prune_stale_branch"))
        clean_again = ExtensionTrait(
            extension=GitExtension(type="clean_before_checkout", options={"deleteUntracked": True})
        )
        assert as_set_list([clean, prune, clean_again]) == (clean_again, prune)


@pytest.mark.unit
class TestTraitComposer:
    """Tests for TraitComposer."""

    def test_applies_traits_in_order(self, composer: TraitComposer) -> None:
        APPLIED.clear()
        traits = [RecordingTrait(label=label) for label in ("a", "b", "c")]
        composer.compose(traits)
        assert APPLIED == ["a", "b", "c"]

    def test_empty_traits(self, composer: TraitComposer) -> None:
        config = composer.compose([])
        assert config.ref_specs == ("+refs/heads/*:refs/remotes/origin/*",)
        assert config.remote_name == "origin"
        assert not config.wants_branches
        assert not config.ignore_on_push_notifications

    def test_remote_name_applies_to_all_templates(self, composer: TraitComposer) -> None:
        config = composer.compose(
            [
                RefSpecsTrait(
                    templates=(REF_SPEC_DEFAULT, "+refs/pull/*:refs/remotes/@{REMOTE}/pr/*")
                ),
                RemoteNameTrait(remote_name="upstream"),
            ]
        )
        assert config.ref_specs == (
            "+refs/heads/*:refs/remotes/upstream/*",
            "+refs/pull/*:refs/remotes/upstream/pr/*",
        )
        assert config.ref_spec_templates[0] == REF_SPEC_DEFAULT

    def test_duplicate_templates_collapse(self, composer: TraitComposer) -> None:
        context = composer.new_context()
        context.with_ref_spec(REF_SPEC_DEFAULT).with_ref_spec(REF_SPEC_DEFAULT)
        assert context.ref_spec_templates == [REF_SPEC_DEFAULT]

    def test_collects_every_contribution(self, composer: TraitComposer) -> None:
        browser = RepositoryBrowser(kind="github", url="https://github.com/org/repo")
        extension = GitExtension(type="lfs_pull")
        config = composer.compose(
            [
                BranchDiscoveryTrait(),
                TagDiscoveryTrait(),
                BrowserTrait(browser=browser),
                GitToolTrait(git_tool="jgit"),
                ExtensionTrait(extension=extension),
                IgnorePushNotificationsTrait(),
            ]
        )
        assert config.wants_branches
        assert config.wants_tags
        assert config.fetch_tags
        assert config.browser == browser
        assert config.git_tool == "jgit"
        assert config.extensions == (extension,)
        assert config.ignore_on_push_notifications

    def test_tags_fetched_without_trait_when_switch_set(self) -> None:
        config = TraitComposer(ignore_tag_discovery_trait=True).compose([BranchDiscoveryTrait()])
        assert config.fetch_tags
        assert not config.wants_tags
        assert REF_SPEC_TAGS not in config.ref_specs

    def test_tags_not_fetched_by_default(self, composer: TraitComposer) -> None:
        assert not composer.compose([BranchDiscoveryTrait()]).fetch_tags

    def test_context_is_fresh_each_time(self, composer: TraitComposer) -> None:
        composer.compose([IgnorePushNotificationsTrait()])
        assert not composer.compose([]).ignore_on_push_notifications

    def test_find(self) -> None:
        remote = RemoteNameTrait(remote_name="fork")
        traits = (BranchDiscoveryTrait(), remote)
        assert TraitComposer.find(traits, RemoteNameTrait) is remote
        assert TraitComposer.find(traits, GitToolTrait) is None

    def test_replace(self) -> None:
        traits = (BranchDiscoveryTrait(), GitToolTrait(git_tool="a"), TagDiscoveryTrait())
        replaced = TraitComposer.replace(traits, GitToolTrait, GitToolTrait(git_tool="b"))
        assert replaced == (
            BranchDiscoveryTrait(),
            TagDiscoveryTrait(),
            GitToolTrait(git_tool="b"),
        )
        assert TraitComposer.replace(traits, GitToolTrait, None) == (
            BranchDiscoveryTrait(),
            TagDiscoveryTrait(),
        )


@pytest.mark.unit
class TestWildcardFilter:
    """Tests for wildcard head filtering."""

    @pytest.mark.parametrize(
        ("patterns", "name", "matches"),
        [
            ("*", "feature/login", True),
            ("main", "main", True),
            ("main", "main2", False),
            ("feature/*", "feature/a/b", True),
            ("main dev", "dev", True),
            ("release-1.0", "release-1x0", False),
            ("", "main", False),
        ],
    )
    def test_wildcard_pattern(self, patterns: str, name: str, matches: bool) -> None:
        assert (wildcard_pattern(patterns).fullmatch(name) is not None) is matches

    def test_includes_and_excludes(self, composer: TraitComposer) -> None:
        config = composer.compose(
            [WildcardFilterTrait(includes="main feature/*", excludes="feature/wip*")]
        )
        assert not config.is_excluded(None, Head(name="main"))
        assert not config.is_excluded(None, Head(name="feature/login"))
        assert config.is_excluded(None, Head(name="feature/wip-login"))
        assert config.is_excluded(None, Head(name="develop"))

    def test_no_filter_excludes_nothing(self, composer: TraitComposer) -> None:
        assert not composer.compose([BranchDiscoveryTrait()]).is_excluded(None, Head(name="x"))
