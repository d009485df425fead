import unittest

from ..interfaces.request import Filter, FilterOperator, ListRequest, OrderDirection, build_filters


class TestFilter(unittest.TestCase):
    def test_single_value_in(self):
        self.assertEqual(Filter.of("name", "test-name").to_query(), "name IN test-name")

    def test_multiple_values_in(self):
        self.assertEqual(Filter.of("name", ["a", "b"]).to_query(), "name IN a,b")

    def test_other_operators(self):
        self.assertEqual(Filter.of("port", 8080, FilterOperator.GREATER_THAN_OR_EQUAL).to_query(), "port>=8080")
        self.assertEqual(Filter.of("host", "www", FilterOperator.EQUAL).to_query(), "host:www")

    def test_booleans_are_lowercase(self):
        self.assertEqual(Filter.of("diego", True).to_query(), "diego IN true")

    def test_non_in_operator_takes_one_value(self):
        with self.assertRaises(ValueError):
            Filter.of("port", [1, 2], FilterOperator.LESS_THAN)

    def test_empty_values_rejected(self):
        with self.assertRaises(ValueError):
            Filter("name", ())


class TestListRequest(unittest.TestCase):
    def test_from_kwargs_maps_id_to_guid_and_skips_none(self):
        request = ListRequest.from_kwargs(name="app", space_id="space-1", organization_id=None)

        self.assertEqual(request.filter_names, ["name", "space_guid"])

    def test_params_identical_across_pages_except_page(self):
        request = ListRequest.from_kwargs(
            results_per_page=2, order_direction="asc", name=["a", "b"], space_id="s1"
        )

        first = request.to_params(1)
        second = request.to_params(2)

        self.assertEqual(first, [
            ("q", "name IN a,b"),
            ("q", "space_guid IN s1"),
            ("order-direction", "asc"),
            ("page", "1"),
            ("results-per-page", "2"),
        ])
        self.assertEqual([p for p in first if p[0] != "page"], [p for p in second if p[0] != "page"])
        self.assertIn(("page", "2"), second)

    def test_results_per_page_bounds(self):
        for bad in (0, 101):
            with self.subTest(results_per_page=bad):
                with self.assertRaises(ValueError):
                    ListRequest(results_per_page=bad)

    def test_page_must_be_positive(self):
        with self.assertRaises(ValueError):
            ListRequest().to_params(0)

    def test_default_results_per_page_does_not_override_explicit(self):
        explicit = ListRequest(results_per_page=5)
        self.assertEqual(explicit.with_results_per_page(50).results_per_page, 5)
        self.assertEqual(ListRequest().with_results_per_page(50).results_per_page, 50)

    def test_results_per_page_must_be_an_integer(self):
        for bad in ("5", 5.0, True):
            with self.subTest(results_per_page=bad):
                with self.assertRaises(ValueError):
                    ListRequest(results_per_page=bad)

    def test_unknown_order_direction_rejected(self):
        with self.assertRaises(ValueError):
            ListRequest.from_kwargs(order_direction="sideways")

    def test_order_direction_enum(self):
        request = ListRequest(order_direction=OrderDirection.DESC, order_by="name")
        self.assertEqual(request.to_params(1), [("order-by", "name"), ("order-direction", "desc"), ("page", "1")])


class TestBuildFilters(unittest.TestCase):
    def test_parses_pairs(self):
        self.assertEqual(
            build_filters(["name=a,b", "space_id=s1"]),
            {"name": ["a", "b"], "space_id": "s1"},
        )

    def test_rejects_list_option_keys(self):
        for key in ("results_per_page", "order_direction", "order_by"):
            with self.subTest(key=key):
                with self.assertRaises(ValueError):
                    build_filters([f"{key}=5"])

    def test_rejects_malformed_pairs(self):
        for bad in ("name", "=x", "name=", "name=,"):
            with self.subTest(pair=bad):
                with self.assertRaises(ValueError):
                    build_filters([bad])


if __name__ == "__main__":
    unittest.main()
