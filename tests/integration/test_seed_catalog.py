import pytest

from django.core.management import call_command

from modules.categories.models import Category
from modules.products.models import Product
from modules.tags.models import Tag

pytestmark = pytest.mark.integration


class TestSeedCatalog:
    def test_seeds_catalog(self):
        call_command("seed_catalog")
        assert Category.objects.count() == 3
        assert Product.objects.count() == 10
        assert Tag.objects.filter(name="Premium").get().products.count() == 3

    def test_is_idempotent(self):
        call_command("seed_catalog")
        call_command("seed_catalog")
        assert Product.objects.count() == 10
        assert Tag.objects.count() == 5

    def test_with_admin(self, django_user_model):
        call_command("seed_catalog", "--with-admin")
        assert django_user_model.objects.filter(username="admin", is_superuser=True).exists()
