"""Unit tests for ProductDjangoRepository against the test database.

Covers the tag search semantics (union, intersection, substring) and the
tag association commands.
"""

from __future__ import annotations

import pytest

from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.tags.models import Tag

pytestmark = pytest.mark.unit


@pytest.fixture()
def repo():
    return ProductDjangoRepository()


@pytest.fixture()
def tagged_catalog(make_product):
    """a: {A}, b: {B}, ab: {A, B}, abc: {A, B, C}, none: {} (in two categories)."""
    make_product(name="a", category="One", tags=["A"])
    make_product(name="b", category="One", tags=["B"])
    make_product(name="ab", category="Two", tags=["A", "B"])
    make_product(name="abc", category="Two", tags=["A", "B", "C"])
    make_product(name="none", category="Two")


def _names(products):
    return sorted(p.name for p in products)


class TestLookups:
    def test_get_by_name_loads_relations(self, repo, make_product):
        make_product(name="Phone", tags=["Premium"])
        product = repo.get_by_name("Phone")
        assert product.category.name == "Electronics"
        assert product.tag_names == ["Premium"]

    def test_get_by_id_malformed_returns_none(self, repo):
        assert repo.get_by_id("123") is None

    def test_get_for_update(self, repo, product):
        assert repo.get_for_update("Phone").id == product.id
        assert repo.get_for_update("Ghost") is None

    def test_list_with_filters(self, repo, tagged_catalog):
        assert _names(repo.list({"category__name__iexact": "one"})) == ["a", "b"]

    def test_find_by_category_name(self, repo, tagged_catalog):
        assert _names(repo.find_by_category_name("Two")) == ["ab", "abc", "none"]
        assert repo.find_by_category_name("Nope") == []


class TestTagSearches:
    def test_union_has_no_duplicates(self, repo, tagged_catalog):
        assert _names(repo.find_by_tag_names(["A", "B"])) == ["a", "ab", "abc", "b"]

    def test_intersection(self, repo, tagged_catalog):
        assert _names(repo.find_by_all_tag_names(["A", "B"], 2)) == ["ab", "abc"]

    def test_intersection_with_unknown_tag_is_empty(self, repo, tagged_catalog):
        assert repo.find_by_all_tag_names(["A", "Z"], 2) == []

    def test_intersection_results_keep_all_tags(self, repo, tagged_catalog):
        [abc] = [p for p in repo.find_by_all_tag_names(["C"], 1)]
        assert abc.tag_names == ["A", "B", "C"]

    def test_pattern(self, repo, make_product):
        make_product(name="p1", tags=["Premium"])
        make_product(name="p2", tags=["Prepaid", "Promo"])
        make_product(name="p3", tags=["Budget"])
        assert _names(repo.find_by_tag_name_containing("Pr")) == ["p1", "p2"]

    def test_category_and_tags(self, repo, tagged_catalog):
        assert _names(repo.find_by_category_and_tag_names("One", ["A", "C"])) == ["a"]


class TestTagAssociations:
    def test_set_tags(self, repo, product, make_tag):
        updated = repo.set_tags(product, [make_tag("X"), make_tag("Y")])
        assert updated.tag_names == ["X", "Y"]

    def test_add_tags_is_a_union(self, repo, make_product):
        product = make_product(tags=["X"])
        updated = repo.add_tags(product, [Tag.objects.get(name="X"), Tag.objects.create(name="Y")])
        assert updated.tag_names == ["X", "Y"]

    def test_remove_tags_by_name_ignores_unknown(self, repo, make_product):
        product = make_product(tags=["X", "Y"])
        updated = repo.remove_tags_by_name(product, ["X", "Z"])
        assert updated.tag_names == ["Y"]
        assert Tag.objects.filter(name="X").exists()

    def test_delete(self, repo, product):
        assert repo.delete(str(product.id)) is True
        assert repo.get_by_id(str(product.id)) is None
        assert repo.delete(str(product.id)) is False
