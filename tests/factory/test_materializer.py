"""Tests for the two-pass materializer."""

import pytest

from trellis.relations.errors import UnresolvableRelationError
from trellis.relations.kinds import RelationKind
from trellis.spec.node import DeclarationMode
from trellis.spec.path import parse_declaration
from trellis.spec.tree import SpecTree


@pytest.fixture
def materializer(factory):
    return factory.materializer


def tree_with(*declarations):
    tree = SpecTree()
    for args in declarations:
        tree.declare(parse_declaration(*args), DeclarationMode.MERGE)
    return tree


class TestPrepare:
    def test_resolves_types_and_descriptors(self, materializer, store):
        tree = tree_with(("servers.tags",), ("team",))

        materializer.prepare(tree.root, "User")

        servers = tree.root.latest_child("servers")
        tags = servers.latest_child("tags")
        team = tree.root.latest_child("team")
        assert tree.root.target_type == "User"
        assert servers.target_type == "Server"
        assert servers.descriptor.kind == RelationKind.OWNED_TO_MANY
        assert tags.descriptor.kind == RelationKind.MANY_TO_MANY
        assert team.descriptor.kind == RelationKind.OWNING_TO_ONE
        assert store.count() == 0

    def test_customizer_runs_during_prepare(self, materializer, store):
        tree = tree_with(("servers", lambda b: b.with_(2, "sites")),)

        materializer.prepare(tree.root, "User")

        servers = tree.root.latest_child("servers")
        assert servers.customized
        assert servers.latest_child("sites").target_type == "Site"
        assert store.count() == 0

    def test_customizer_declarations_are_checked(self, materializer):
        tree = tree_with(("servers", lambda b: b.with_("bogus")),)

        with pytest.raises(UnresolvableRelationError) as exc_info:
            materializer.prepare(tree.root, "User")
        assert exc_info.value.relation == "bogus"


class TestMaterialize:
    def test_run_returns_roots(self, materializer, store):
        tree = tree_with((2, "servers"),)
        tree.root.count = 2

        users = materializer.run(tree.root, "User")

        assert len(users) == 2
        assert store.count("Server") == 4

    def test_injected_keys_win(self, materializer, store):
        tree = tree_with(("sites", {"server_id": 999}),)

        server = materializer.run(tree.root, "Server")[0]

        assert server.sites[0]["server_id"] == server.key

    def test_make_builds_plain_records(self, materializer, store):
        tree = tree_with(("comments",),)

        user = materializer.run(tree.root, "User", persist=False)[0]

        assert user.key is None
        assert user.comments[0]["commentable_type"] == "User"
        assert user.comments[0]["commentable_id"] is None
        assert store.count() == 0
