"""Tests for seed plan loading and execution."""

import pytest

from trellis.plan.errors import PlanError
from trellis.plan.loader import apply_plan, parse_plan, parse_plan_from_string, run_plan
from trellis.plan.models import PlanDeclaration
from trellis.schema.errors import SchemaLoadError


class TestParsePlan:
    def test_example_plan(self, examples_dir):
        plan = parse_plan(examples_dir / "plans" / "admin_with_servers.yaml")

        assert plan.entity == "User"
        assert plan.states == ["admin"]
        assert plan.attributes == {"name": "Ada Lovelace"}
        assert [d.path for d in plan.declarations] == [
            "servers",
            "servers.sites",
            "servers",
            "servers.tags",
        ]
        assert plan.declarations[2].new_branch is True
        assert plan.declarations[3].pivot == {"order": 1}

    def test_bare_path_declarations(self):
        plan = parse_plan_from_string("""
entity: User
with:
  - servers
  - profile
""")

        assert [d.path for d in plan.declarations] == ["servers", "profile"]
        assert plan.declarations[0].count is None

    def test_populate_by_name(self):
        declaration = PlanDeclaration(path="servers", new_branch=True)
        assert declaration.new_branch is True

    def test_invalid_plan(self, examples_dir):
        with pytest.raises(PlanError) as exc_info:
            parse_plan(examples_dir / "invalid" / "bad_plan.yaml")

        locations = {error["loc"] for error in exc_info.value.errors}
        assert "count" in locations
        assert any(loc.startswith("with.0") for loc in locations)

    def test_missing_entity(self):
        with pytest.raises(PlanError):
            parse_plan_from_string("count: 2")

    def test_missing_file(self, tmp_path):
        with pytest.raises(SchemaLoadError):
            parse_plan(tmp_path / "nope.yaml")


class TestRunPlan:
    def test_example_plan_totals(self, factory, store, examples_dir):
        plan = parse_plan(examples_dir / "plans" / "admin_with_servers.yaml")

        records = run_plan(factory, plan)

        assert len(records) == 1
        user = records[0]
        assert user["name"] == "Ada Lovelace"
        assert user["role"] == "admin"
        assert store.count("User") == 1
        assert store.count("Server") == 3
        assert store.count("Site") == 6
        assert store.count("Tag") == 2
        assert len(store.pivots("server_tag")) == 2
        assert [s["status"] for s in user.servers] == ["active", "active", "retired"]
        assert all(row["order"] == 1 for row in store.pivots("server_tag"))

    def test_run_plan_without_persisting(self, factory, store):
        plan = parse_plan_from_string("""
entity: Server
count: 2
with:
  - path: sites
    count: 2
    states: secure
""")

        records = run_plan(factory, plan, persist=False)

        assert len(records) == 2
        assert all(site["ssl"] is True for r in records for site in r.sites)
        assert store.count() == 0

    def test_single_root_is_still_a_list(self, factory):
        plan = parse_plan_from_string("entity: Team")
        assert len(run_plan(factory, plan)) == 1

    def test_apply_plan_returns_unconsumed_builder(self, factory, store):
        plan = parse_plan_from_string("""
entity: User
with:
  - path: servers
    count: 2
""")

        builder = apply_plan(factory, plan)

        assert store.count() == 0
        assert builder.describe()["children"][0]["count"] == 2
        builder.create()
        assert store.count("Server") == 2
