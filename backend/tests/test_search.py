"""Query/filter layer tests."""

from workshop.domain import ActivityLog, Product
from workshop.services import search_service


def _products():
    return [
        Product(id=1, name="Brake Pads", type="part", category="Brakes", brand="Bosch"),
        Product(id=2, name="Engine Oil", type="part", category="Engine", brand="Mobil 1"),
        Product(id=3, name="Floor Mats", type="accessory", category="Interior", brand="WeatherTech"),
        Product(id=4, name="Wheel Alignment", type="service", category="Wheels", brand=""),
    ]


class TestFilterProducts:

    def test_no_filters_returns_everything_in_order(self):
        products = _products()
        assert [p.id for p in search_service.filter_products(products)] == [1, 2, 3, 4]

    def test_search_is_case_insensitive_across_fields(self):
        products = _products()
        assert [p.id for p in search_service.filter_products(products, search="BOSCH")] == [1]
        assert [p.id for p in search_service.filter_products(products, search="engine")] == [2]
        assert [p.id for p in search_service.filter_products(products, search="mat")] == [3]

    def test_type_filter(self):
        products = _products()
        assert [p.id for p in search_service.filter_products(products, product_type="part")] == [1, 2]
        assert len(search_service.filter_products(products, product_type="all")) == 4

    def test_search_and_filter_combine(self):
        products = _products()
        assert search_service.filter_products(products, search="oil", product_type="accessory") == []

    def test_blank_search_ignored(self):
        assert len(search_service.filter_products(_products(), search="   ")) == 4

    def test_input_not_modified(self):
        products = _products()
        result = search_service.filter_products(products, search="brake")
        result.clear()
        assert len(products) == 4


class TestFilterLogs:

    def test_action_and_search(self):
        logs = [
            ActivityLog(id=1, user_id=1, user_name="John Smith", action="ADD_PRODUCT",
                        details="Added product: Brake Pads", entity_type="product"),
            ActivityLog(id=2, user_id=2, user_name="Sarah Davis", action="GENERATE_INVOICE",
                        details="Generated invoice INV-000001 for job card JC-0001", entity_type="invoice"),
        ]
        assert [e.id for e in search_service.filter_logs(logs, search="sarah")] == [2]
        assert [e.id for e in search_service.filter_logs(logs, action="ADD_PRODUCT")] == [1]
        assert [e.id for e in search_service.filter_logs(logs, search="inv-0000")] == [2]
