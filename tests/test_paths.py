"""
Tests for URL path building
"""
from core_algolia import paths
from core_algolia.types import MultiQueryStrategy


class TestPaths:
    """Test endpoint paths"""

    def test_index_paths(self):
        assert paths.indexes() == "/1/indexes"
        assert paths.index("products") == "/1/indexes/products"
        assert paths.batch("products") == "/1/indexes/products/batch"
        assert paths.clear("products") == "/1/indexes/products/clear"
        assert paths.operation("products") == "/1/indexes/products/operation"
        assert paths.delete_by("products") == "/1/indexes/products/deleteByQuery"

    def test_index_name_is_encoded(self):
        assert paths.index("my index/2") == "/1/indexes/my%20index%2F2"

    def test_task_path(self):
        assert paths.task("products", 42) == "/1/indexes/products/task/42"

    def test_record_paths(self):
        assert paths.record("products", "a b") == "/1/indexes/products/a%20b"
        assert paths.partial_record("products", "1") == "/1/indexes/products/1/partial"
        assert paths.partial_record("products", "1", upsert=False) == (
            "/1/indexes/products/1/partial?createIfNotExists=false"
        )

    def test_multiple_queries(self):
        assert paths.multiple_queries() == "/1/indexes/*/queries"
        assert paths.multiple_queries(MultiQueryStrategy.NONE) == "/1/indexes/*/queries"
        assert paths.multiple_queries(MultiQueryStrategy.STOP_IF_ENOUGH_MATCHES) == (
            "/1/indexes/*/queries?strategy=stopIfEnoughMatches"
        )

    def test_search_path(self):
        path = paths.search("products", "red lamp", {"page": 1})
        assert path == "/1/indexes/products?page=1&query=red+lamp"

    def test_search_facet_path(self):
        assert paths.search_facet("species", "phylum") == "/1/indexes/species/facets/phylum/query"

    def test_settings_path(self):
        assert paths.settings("products") == "/1/indexes/products/settings"
        assert paths.settings("products", {"forwardToReplicas": True}) == (
            "/1/indexes/products/settings?forwardToReplicas=true"
        )
        assert paths.settings("products", {"forwardToReplicas": None}) == (
            "/1/indexes/products/settings"
        )

    def test_synonym_and_rule_paths(self):
        assert paths.search_synonyms("products") == "/1/indexes/products/synonyms/search"
        assert paths.synonym("products", "syn-1") == "/1/indexes/products/synonyms/syn-1"
        assert paths.batch_synonyms("products", {"replaceExistingSynonyms": False}) == (
            "/1/indexes/products/synonyms/batch?replaceExistingSynonyms=false"
        )
        assert paths.clear_synonyms("products") == "/1/indexes/products/synonyms/clear"
        assert paths.search_rules("products") == "/1/indexes/products/rules/search"
        assert paths.rule("products", "r1", {"forwardToReplicas": True}) == (
            "/1/indexes/products/rules/r1?forwardToReplicas=true"
        )
        assert paths.batch_rules("products", {"clearExistingRules": True}) == (
            "/1/indexes/products/rules/batch?clearExistingRules=true"
        )
        assert paths.clear_rules("products") == "/1/indexes/products/rules/clear"

    def test_logs_path(self):
        assert paths.logs() == "/1/logs"
        assert paths.logs({"offset": 0, "length": 10, "type": "error"}) == (
            "/1/logs?offset=0&length=10&type=error"
        )

    def test_to_query_joins_lists(self):
        assert paths.to_query({"attributesToRetrieve": ["name", "price"]}) == (
            "?attributesToRetrieve=name%2Cprice"
        )
        assert paths.to_query({}) == ""
        assert paths.to_query({"page": None}) == ""
