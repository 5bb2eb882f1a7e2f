from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from fakes import sample_raw

from suttaviewer.corpus import MetadataStore, build_collections
from suttaviewer.search import fuzzy
from suttaviewer.search import clear_search_cache, flatten_documents, format_result, search, search_key


class SearchBehaviorTests(unittest.TestCase):
    def setUp(self) -> None:
        clear_search_cache()
        self.collections = build_collections(sample_raw())

    def tearDown(self) -> None:
        clear_search_cache()

    def test_flatten_keeps_only_valid_documents_in_depth_first_order(self) -> None:
        numbers = [record.document.number for record in flatten_documents(self.collections)]

        self.assertEqual(numbers, ["dn1", "mn1", "mn2", "mn11", "mn51"])

    def test_flatten_respects_scope(self) -> None:
        numbers = [record.document.number for record in flatten_documents(self.collections, "MN")]

        self.assertEqual(numbers, ["mn1", "mn2", "mn11", "mn51"])
        self.assertEqual(flatten_documents(self.collections, "SN"), [])

    def test_search_key_is_lowercase_concatenation(self) -> None:
        dn1 = self.collections[0].documents[0]

        self.assertEqual(search_key(dn1), "dn1 brahmajāla brahmajālasutta dn")

    def test_blank_queries_short_circuit_without_flattening(self) -> None:
        with mock.patch("suttaviewer.search.fuzzy._flatten_walk") as walk_mock:
            self.assertIsNone(search(self.collections, None, ""))
            self.assertIsNone(search(self.collections, None, "   "))

        walk_mock.assert_not_called()

    def test_search_is_case_insensitive_substring_match(self) -> None:
        matches = search(self.collections, None, "ROOT")

        self.assertEqual([doc.number for doc in matches], ["mn1"])

    def test_search_matches_collection_code_and_pali_title(self) -> None:
        by_code = search(self.collections, None, "(dn)") or []
        by_code_key = search(self.collections, None, " dn") or []
        by_pali = search(self.collections, None, "sabbāsava") or []

        self.assertEqual(by_code, [])
        self.assertEqual([doc.number for doc in by_code_key], ["dn1"])
        self.assertEqual([doc.number for doc in by_pali], ["mn2"])

    def test_exact_identifier_finds_every_valid_document(self) -> None:
        for record in flatten_documents(self.collections):
            with self.subTest(number=record.document.number):
                matches = search(self.collections, None, record.document.number.lower())
                self.assertIn(record.document, matches)

    def test_invalid_documents_never_match(self) -> None:
        self.assertEqual(search(self.collections, None, "dn2"), [])
        self.assertEqual(search(self.collections, None, "error"), [])
        self.assertEqual(search(self.collections, None, "ambaṭṭha"), [])

    def test_results_keep_flattening_order_across_calls(self) -> None:
        first = search(self.collections, None, "mn")
        clear_search_cache()
        second = search(self.collections, None, "mn")

        self.assertEqual([doc.number for doc in first], ["mn1", "mn2", "mn11", "mn51"])
        self.assertEqual(first, second)

    def test_scoped_search_excludes_other_collections(self) -> None:
        self.assertEqual(search(self.collections, "DN", "mn"), [])
        self.assertEqual([doc.number for doc in search(self.collections, "MN", "1")], ["mn1", "mn11", "mn51"])

    def test_flatten_results_are_cached_per_forest(self) -> None:
        with mock.patch("suttaviewer.search.fuzzy._flatten_walk", wraps=lambda c, s: []) as walk_mock:
            flatten_documents(self.collections, None)
            flatten_documents(self.collections, None)
            flatten_documents(self.collections, "DN")

        self.assertEqual(walk_mock.call_count, 2)

    def test_reloaded_forest_evicts_previous_records(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "meta.json"
            path.write_text(json.dumps(sample_raw()), encoding="utf-8")
            store = MetadataStore(path)

            for _ in range(5):
                self.assertEqual([doc.number for doc in search(store.load(), None, "dn1")], ["dn1"])
                store.clear_cache()

            self.assertEqual(len(fuzzy._SEARCH_RECORDS_CACHE), 1)

            forest = store.load()
            flatten_documents(forest, None)
            flatten_documents(forest, "MN")
            self.assertEqual(len(fuzzy._SEARCH_RECORDS_CACHE), 2)

    def test_format_result(self) -> None:
        self.assertEqual(format_result(self.collections[0].documents[0]), "dn1: Brahmajāla / Brahmajālasutta (DN)")


if __name__ == "__main__":
    unittest.main()
