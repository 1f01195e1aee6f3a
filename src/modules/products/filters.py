import django_filters

from modules.products.models import Product


class ProductFilter(django_filters.FilterSet):
    name = django_filters.CharFilter(field_name="name", lookup_expr="icontains")
    category = django_filters.CharFilter(field_name="category__name", lookup_expr="iexact")
    min_price = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="price", lookup_expr="lte")

    class Meta:
        model = Product
        fields = ["name", "category", "min_price", "max_price"]

    def lookups(self):
        """Translate the cleaned query params into ORM look-ups for the repository."""
        lookups = {}
        for name, value in self.form.cleaned_data.items():
            if value in (None, ""):
                continue
            f = self.filters[name]
            lookups[f"{f.field_name}__{f.lookup_expr}"] = value
        return lookups
