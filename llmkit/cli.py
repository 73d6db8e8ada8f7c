#!/usr/bin/env python3
"""
llmkit - Command Line Interface

Commands:
    chat    - Send a prompt to a chat model
    tokens  - Estimate the token count of a text
    ingest  - Split, embed and store documents in Chroma
    search  - Find stored segments relevant to a query
    stats   - Show embedding store statistics and configuration

Usage:
    python -m llmkit.cli chat "Tell me a joke" --stream
    python -m llmkit.cli chat "Hello" --provider ollama --system "Answer briefly"
    python -m llmkit.cli tokens "How many tokens is this?"
    python -m llmkit.cli ingest docs/ --recursive
    python -m llmkit.cli search "reset password" --top-k 3 --min-score 0.7
    python -m llmkit.cli stats

For help on a specific command:
    python -m llmkit.cli <command> --help
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from llmkit.config import PROVIDERS, settings
from llmkit.data.message import ChatMessage, SystemMessage, UserMessage
from llmkit.logger import get_logger, init_logging

init_logging()
logger = get_logger(__name__)


def _chat_model(provider: str, streaming: bool):
    if provider == "ollama":
        from llmkit.model.ollama import OllamaChatModel, OllamaStreamingChatModel
        return OllamaStreamingChatModel() if streaming else OllamaChatModel()

    from llmkit.model.azure import AzureOpenAiChatModel, AzureOpenAiStreamingChatModel
    if provider == "openai":
        model_class = AzureOpenAiStreamingChatModel if streaming else AzureOpenAiChatModel
        return model_class(non_azure_api_key=settings.openai.api_key, deployment_name=settings.openai.model_name)
    return AzureOpenAiStreamingChatModel() if streaming else AzureOpenAiChatModel()


def _embedding_model(provider: str):
    if provider == "ollama":
        from llmkit.model.ollama import OllamaEmbeddingModel
        return OllamaEmbeddingModel()

    from llmkit.model.azure import AzureOpenAiEmbeddingModel
    if provider == "openai":
        return AzureOpenAiEmbeddingModel(
            non_azure_api_key=settings.openai.api_key,
            deployment_name=settings.openai.embedding_model_name,
        )
    return AzureOpenAiEmbeddingModel()


def _embedding_store():
    from llmkit.store.chroma import ChromaEmbeddingStore
    return ChromaEmbeddingStore()


def cmd_chat(args: argparse.Namespace) -> int:
    """
    Send a single prompt and print the answer.
    """
    from llmkit.model.chat import CollectingStreamingResponseHandler

    messages: List[ChatMessage] = []
    if args.system:
        messages.append(SystemMessage(args.system))
    messages.append(UserMessage(args.prompt))

    try:
        settings.validate_all(args.provider)
        model = _chat_model(args.provider, args.stream)

        if args.stream:
            handler = CollectingStreamingResponseHandler(
                on_token=lambda token: print(token, end="", flush=True)
            )
            model.generate(messages, handler)
            print()
            handler.raise_for_error()
            response = handler.response
        else:
            response = model.generate(messages)
            print(response.content.text or "")

        if response is not None and response.token_usage is not None:
            usage = response.token_usage
            print(
                f"\n📊 Tokens: input={usage.input_token_count}, "
                f"output={usage.output_token_count}, total={usage.total_token_count}"
            )
        return 0

    except Exception as e:
        print(f"❌ Chat failed: {e}")
        logger.exception("Chat error")
        return 1


def cmd_tokens(args: argparse.Namespace) -> int:
    """
    Estimate how many tokens a text uses for the given model.
    """
    from llmkit.model.tokenizer import OpenAiTokenizer

    try:
        tokenizer = OpenAiTokenizer(args.model)
        count = tokenizer.estimate_token_count_in_text(args.text)
        print(f"{count} tokens ({args.model})")
        return 0

    except Exception as e:
        print(f"❌ Token estimation failed: {e}")
        logger.exception("Tokens error")
        return 1


def cmd_ingest(args: argparse.Namespace) -> int:
    """
    Ingest a file or a directory into the embedding store.
    """
    from llmkit.document import DocumentByTokenSplitter, EmbeddingStoreIngestor, FileSystemDocumentLoader

    print(f"\n📂 Ingesting: {args.path}")
    print("-" * 50)

    try:
        settings.validate_all(args.provider)
        path = Path(args.path)
        if path.is_dir():
            documents = FileSystemDocumentLoader.load_documents(path, recursive=args.recursive)
        else:
            documents = [FileSystemDocumentLoader.load_document(path)]

        ingestor = EmbeddingStoreIngestor(
            embedding_model=_embedding_model(args.provider),
            embedding_store=_embedding_store(),
            document_splitter=DocumentByTokenSplitter(),
        )
        result = ingestor.ingest(documents)

        print(f"Documents processed: {result.documents_processed}")
        print(f"Segments created:    {result.segments_created}")
        print(f"Segments ingested:   {result.segments_ingested}")

        if result.errors:
            print(f"\n⚠️  {len(result.errors)} errors:")
            for error in result.errors:
                print(f"  - {error}")
            return 1

        print("\n✅ Ingestion complete")
        return 0

    except Exception as e:
        print(f"❌ Ingestion failed: {e}")
        logger.exception("Ingestion error")
        return 1


def cmd_search(args: argparse.Namespace) -> int:
    """
    Print the stored segments most relevant to a query.
    """
    try:
        settings.validate_all(args.provider)
        embedding = _embedding_model(args.provider).embed(args.query).content
        matches = _embedding_store().find_relevant(embedding, args.top_k, args.min_score)

        if not matches:
            print("No relevant segments found.")
            return 0

        for i, match in enumerate(matches, 1):
            text = match.embedded.text if match.embedded is not None else ""
            source = match.embedded.metadata.get("file_name", "unknown") if match.embedded is not None else "unknown"
            print(f"\n[{i}] score={match.score:.3f} source={source}")
            print(f"    {text[:200]}")
        return 0

    except Exception as e:
        print(f"❌ Search failed: {e}")
        logger.exception("Search error")
        return 1


def cmd_stats(args: argparse.Namespace) -> int:
    """
    Show embedding store statistics and configuration.
    """
    print("\n📊 Statistics")
    print("-" * 50)

    try:
        stats = _embedding_store().get_stats()

        print("Embedding Store:")
        print(f"  Collection:      {stats['collection_name']}")
        print(f"  Embeddings:      {stats['embedding_count']}")
        print(f"  Location:        {stats['location']}")

        print("\nConfiguration:")
        print(f"  Segment size:    {settings.splitter.max_segment_tokens} tokens")
        print(f"  Segment overlap: {settings.splitter.overlap_tokens} tokens")
        print(f"  Chat deployment: {settings.azure.chat_deployment}")
        print(f"  Ollama model:    {settings.ollama.model_name}")
        print(f"  Temperature:     {settings.llm.temperature}")
        print(f"  Environment:     {settings.app_env}")
        return 0

    except Exception as e:
        print(f"❌ Failed to get stats: {e}")
        logger.exception("Stats error")
        return 1


def _add_provider_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--provider", "-p",
        choices=PROVIDERS,
        default="azure",
        help="Model provider (default: azure)"
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all commands."""
    parser = argparse.ArgumentParser(
        prog="llmkit",
        description="Multi-provider LLM client toolkit",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Chat:
    python -m llmkit.cli chat "Tell me a joke" --stream
    python -m llmkit.cli chat "Hello" --provider ollama

  Documents:
    python -m llmkit.cli ingest docs/ --recursive
    python -m llmkit.cli search "refund policy" --top-k 3
        """
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Chat command
    chat_parser = subparsers.add_parser("chat", help="Send a prompt to a chat model")
    chat_parser.add_argument("prompt", help="Prompt to send")
    _add_provider_argument(chat_parser)
    chat_parser.add_argument(
        "--stream", "-s",
        action="store_true",
        help="Stream the response"
    )
    chat_parser.add_argument(
        "--system",
        help="System message to send before the prompt"
    )
    chat_parser.set_defaults(func=cmd_chat)

    # Tokens command
    tokens_parser = subparsers.add_parser("tokens", help="Estimate the token count of a text")
    tokens_parser.add_argument("text", help="Text to measure")
    tokens_parser.add_argument(
        "--model", "-m",
        default="gpt-3.5-turbo",
        help="Model whose tokenizer to use (default: gpt-3.5-turbo)"
    )
    tokens_parser.set_defaults(func=cmd_tokens)

    # Ingest command
    ingest_parser = subparsers.add_parser("ingest", help="Ingest documents into the embedding store")
    ingest_parser.add_argument("path", help="File or directory path to ingest")
    _add_provider_argument(ingest_parser)
    ingest_parser.add_argument(
        "--recursive", "-r",
        action="store_true",
        default=False,
        help="Process directories recursively"
    )
    ingest_parser.set_defaults(func=cmd_ingest)

    # Search command
    search_parser = subparsers.add_parser("search", help="Search the embedding store")
    search_parser.add_argument("query", help="Query text")
    _add_provider_argument(search_parser)
    search_parser.add_argument(
        "--top-k", "-k",
        type=int,
        default=5,
        help="Maximum number of results (default: 5)"
    )
    search_parser.add_argument(
        "--min-score",
        type=float,
        default=0.0,
        help="Minimum relevance score between 0 and 1 (default: 0.0)"
    )
    search_parser.set_defaults(func=cmd_search)

    # Stats command
    stats_parser = subparsers.add_parser("stats", help="Show embedding store statistics")
    stats_parser.set_defaults(func=cmd_stats)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
