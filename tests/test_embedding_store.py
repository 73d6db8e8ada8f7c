"""
Tests for Embedding Store Module

Tests relevance scores, the EmbeddingStore contract defaults and the
ChromaEmbeddingStore adapter against a mocked chromadb client.
"""

import pytest
from unittest.mock import MagicMock, patch


class TestRelevanceScore:
    """Tests for relevance score conversion."""

    def test_from_cosine_similarity(self):
        """Test similarity [-1, 1] maps to [0, 1]."""
        from llmkit.store.embedding import RelevanceScore

        assert RelevanceScore.from_cosine_similarity(1.0) == 1.0
        assert RelevanceScore.from_cosine_similarity(0.0) == 0.5
        assert RelevanceScore.from_cosine_similarity(-1.0) == 0.0

    def test_from_cosine_distance(self):
        """Test distance [0, 2] maps to [1, 0]."""
        from llmkit.store.embedding import RelevanceScore

        assert RelevanceScore.from_cosine_distance(0.0) == 1.0
        assert RelevanceScore.from_cosine_distance(0.2) == pytest.approx(0.9)
        assert RelevanceScore.from_cosine_distance(2.0) == 0.0


class TestEmbeddingStoreContract:
    """Tests for default EmbeddingStore behaviour."""

    def test_memory_search_not_implemented(self, mock_chroma_client):
        """Test memory-scoped search is optional."""
        from llmkit.data.embedding import Embedding
        from llmkit.store.chroma import ChromaEmbeddingStore

        store = ChromaEmbeddingStore(collection_name="test", client=mock_chroma_client)

        with pytest.raises(NotImplementedError):
            store.find_relevant_for_memory("user-1", Embedding([1.0]), 3)


class TestChromaEmbeddingStoreInit:
    """Tests for client selection."""

    def test_persistent_client(self, tmp_path):
        """Test local storage uses PersistentClient."""
        from llmkit.store.chroma import ChromaEmbeddingStore

        with patch("llmkit.store.chroma.chromadb") as chromadb:
            chromadb.PersistentClient.return_value.get_or_create_collection.return_value.count.return_value = 0
            store = ChromaEmbeddingStore(collection_name="docs", persist_directory=str(tmp_path / "db"))

        assert chromadb.PersistentClient.call_args[1]["path"] == str(tmp_path / "db")
        assert (tmp_path / "db").is_dir()
        chromadb.PersistentClient.return_value.get_or_create_collection.assert_called_once_with(
            name="docs", metadata={"hnsw:space": "cosine"}
        )
        assert store.location == str(tmp_path / "db")

    def test_http_client(self):
        """Test a host switches to HttpClient."""
        from llmkit.store.chroma import ChromaEmbeddingStore

        with patch("llmkit.store.chroma.chromadb") as chromadb:
            chromadb.HttpClient.return_value.get_or_create_collection.return_value.count.return_value = 0
            store = ChromaEmbeddingStore(collection_name="docs", host="chroma.local", port=9000)

        assert chromadb.HttpClient.call_args[1]["host"] == "chroma.local"
        assert chromadb.HttpClient.call_args[1]["port"] == 9000
        chromadb.PersistentClient.assert_not_called()
        assert store.location == "chroma.local:9000"

    def test_default_collection_from_settings(self, mock_chroma_client):
        """Test the collection name defaults from settings."""
        from llmkit.store.chroma import ChromaEmbeddingStore

        store = ChromaEmbeddingStore(client=mock_chroma_client)
        assert store.collection_name == "llmkit"


class TestChromaEmbeddingStore:
    """Tests for adding, searching and removing."""

    @pytest.fixture
    def store(self, mock_chroma_client):
        from llmkit.store.chroma import ChromaEmbeddingStore
        return ChromaEmbeddingStore(collection_name="test", client=mock_chroma_client)

    @pytest.fixture
    def collection(self, mock_chroma_client):
        return mock_chroma_client.get_or_create_collection.return_value

    def test_add_generates_id(self, store, collection):
        """Test add returns a generated id and stores the vector."""
        from llmkit.data.embedding import Embedding

        id = store.add(Embedding([0.1, 0.2]))

        kwargs = collection.upsert.call_args[1]
        assert kwargs["ids"] == [id]
        assert kwargs["embeddings"] == [[0.1, 0.2]]
        assert "documents" not in kwargs

    def test_add_with_id(self, store, collection):
        """Test a caller-supplied id is used."""
        from llmkit.data.embedding import Embedding

        store.add_with_id("my-id", Embedding([1.0]))

        assert collection.upsert.call_args[1]["ids"] == ["my-id"]

    def test_add_all_with_segments(self, store, collection):
        """Test segments are stored as documents with metadata."""
        from llmkit.data.document import TextSegment
        from llmkit.data.embedding import Embedding
        from llmkit.store.chroma import EMPTY_METADATA_KEY

        ids = store.add_all(
            [Embedding([1.0, 0.0]), Embedding([0.0, 1.0])],
            [TextSegment.from_text("first", {"file_name": "a.txt"}), TextSegment.from_text("second")],
        )

        kwargs = collection.upsert.call_args[1]
        assert len(ids) == 2 and len(set(ids)) == 2
        assert kwargs["documents"] == ["first", "second"]
        assert kwargs["metadatas"][0] == {"file_name": "a.txt"}
        assert kwargs["metadatas"][1] == {EMPTY_METADATA_KEY: ""}

    def test_add_all_without_metadata(self, store, collection):
        """Test metadatas is omitted when no segment has metadata."""
        from llmkit.data.document import TextSegment
        from llmkit.data.embedding import Embedding

        store.add_all([Embedding([1.0])], [TextSegment.from_text("plain")])

        assert "metadatas" not in collection.upsert.call_args[1]

    def test_add_all_length_mismatch(self, store):
        """Test embeddings and segments must pair up."""
        from llmkit.data.document import TextSegment
        from llmkit.data.embedding import Embedding

        with pytest.raises(ValueError, match="same size"):
            store.add_all([Embedding([1.0]), Embedding([2.0])], [TextSegment.from_text("only one")])

    def test_add_all_empty(self, store, collection):
        """Test nothing is sent for an empty batch."""
        assert store.add_all([]) == []
        collection.upsert.assert_not_called()

    def test_find_relevant_empty_store(self, store, collection):
        """Test an empty store is not queried."""
        from llmkit.data.embedding import Embedding

        assert store.find_relevant(Embedding([1.0, 0.0]), 5) == []
        collection.query.assert_not_called()

    def test_find_relevant(self, store, collection):
        """Test distances become scores, filtered and sorted."""
        from llmkit.data.embedding import Embedding

        collection.count.return_value = 3
        collection.query.return_value = {
            "ids": [["b", "a", "c"]],
            "documents": [["doc b", "doc a", "doc c"]],
            "metadatas": [[None, {"file_name": "a.txt"}, {"__llmkit_empty__": ""}]],
            "distances": [[0.6, 0.2, 1.4]],
            "embeddings": [[[0.5, 0.5], [1.0, 0.0], [0.0, 1.0]]],
        }

        matches = store.find_relevant(Embedding([1.0, 0.0]), max_results=10, min_score=0.5)

        assert collection.query.call_args[1]["n_results"] == 3
        assert [m.embedding_id for m in matches] == ["a", "b"]
        assert matches[0].score == pytest.approx(0.9)
        assert matches[1].score == pytest.approx(0.7)
        assert matches[0].embedded.text == "doc a"
        assert matches[0].embedded.metadata.get("file_name") == "a.txt"
        assert matches[0].embedding.vector == [1.0, 0.0]
        assert len(matches[1].embedded.metadata) == 0

    def test_find_relevant_strips_placeholder(self, store, collection):
        """Test the empty-metadata placeholder is not returned."""
        from llmkit.data.embedding import Embedding
        from llmkit.store.chroma import EMPTY_METADATA_KEY

        collection.count.return_value = 1
        collection.query.return_value = {
            "ids": [["c"]],
            "documents": [["doc c"]],
            "metadatas": [[{EMPTY_METADATA_KEY: ""}]],
            "distances": [[0.0]],
            "embeddings": [[[0.0, 1.0]]],
        }

        match = store.find_relevant(Embedding([0.0, 1.0]), max_results=1)[0]

        assert EMPTY_METADATA_KEY not in match.embedded.metadata
        assert len(match.embedded.metadata) == 0

    def test_user_underscore_key_kept(self, store, collection):
        """Test a user metadata key named "_" survives a round trip."""
        from llmkit.data.document import TextSegment
        from llmkit.data.embedding import Embedding

        store.add_all(
            [Embedding([1.0]), Embedding([0.5])],
            [TextSegment.from_text("a", {"_": "x"}), TextSegment.from_text("b")],
        )
        stored = collection.upsert.call_args[1]["metadatas"]

        collection.count.return_value = 1
        collection.query.return_value = {
            "ids": [["a"]],
            "documents": [["a"]],
            "metadatas": [[stored[0]]],
            "distances": [[0.0]],
            "embeddings": [[[1.0]]],
        }

        match = store.find_relevant(Embedding([1.0]), max_results=1)[0]

        assert stored[0] == {"_": "x"}
        assert match.embedded.metadata.get("_") == "x"

    def test_find_relevant_invalid_max_results(self, store):
        """Test max_results must be positive."""
        from llmkit.data.embedding import Embedding

        with pytest.raises(ValueError):
            store.find_relevant(Embedding([1.0]), max_results=0)

    def test_remove_ids(self, store, collection):
        """Test removing specific ids."""
        store.remove_all(["a", "b"])
        collection.delete.assert_called_once_with(ids=["a", "b"])

    def test_remove_all(self, store, mock_chroma_client):
        """Test clearing recreates the collection."""
        store.remove_all()

        mock_chroma_client.delete_collection.assert_called_once_with(name="test")
        mock_chroma_client.create_collection.assert_called_once_with(
            name="test", metadata={"hnsw:space": "cosine"}
        )

    def test_get_stats(self, store, collection):
        """Test statistics."""
        collection.count.return_value = 7

        stats = store.get_stats()

        assert stats["collection_name"] == "test"
        assert stats["embedding_count"] == 7
