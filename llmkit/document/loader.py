"""
File System Document Loader

Loads documents from files and directories and records where each one
came from in its metadata.

Usage:
    from llmkit.document import FileSystemDocumentLoader

    document = FileSystemDocumentLoader.load_document("docs/faq.json")
    documents = FileSystemDocumentLoader.load_documents("docs/", recursive=True)
"""

from pathlib import Path
from typing import List, Optional, Sequence, Union

from llmkit.data.document import Document
from llmkit.document.parser import DocumentParser, JsonDocumentParser, TextDocumentParser
from llmkit.logger import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]


def _default_parser(path: Path) -> DocumentParser:
    if path.suffix.lower() == ".json":
        return JsonDocumentParser()
    return TextDocumentParser()


class FileSystemDocumentLoader:

    @staticmethod
    def load_document(path: PathLike, parser: Optional[DocumentParser] = None) -> Document:
        """
        Load a single file.

        Args:
            path: File to load
            parser: Parser to use (JSON for .json files, plain text otherwise)

        Returns:
            Document with file_name and absolute_directory_path metadata

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the path is a directory or the content cannot be parsed
        """
        file = Path(path)
        if not file.exists():
            raise FileNotFoundError(f"File not found: {path}")
        if file.is_dir():
            raise ValueError(f"'{path}' is a directory, not a file")

        parser = parser or _default_parser(file)
        with open(file, "rb") as stream:
            document = parser.parse(stream)

        document.metadata.add(Document.FILE_NAME, file.name)
        document.metadata.add(Document.ABSOLUTE_DIRECTORY_PATH, str(file.resolve().parent))
        return document

    @staticmethod
    def load_documents(
        directory: PathLike,
        parser: Optional[DocumentParser] = None,
        recursive: bool = False,
        extensions: Optional[Sequence[str]] = None,
    ) -> List[Document]:
        """
        Load every file in a directory.

        Files that fail to load are skipped with a warning.

        Args:
            directory: Directory to scan
            parser: Parser for every file (chosen per extension when None)
            recursive: Whether to descend into subdirectories
            extensions: Only load files with these extensions, e.g. [".md", "txt"]
        """
        root = Path(directory)
        if not root.exists():
            raise FileNotFoundError(f"Directory not found: {directory}")
        if not root.is_dir():
            raise ValueError(f"'{directory}' is not a directory")

        suffixes = None
        if extensions:
            suffixes = {ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in extensions}

        files = sorted(p for p in (root.rglob("*") if recursive else root.glob("*")) if p.is_file())
        if suffixes is not None:
            files = [p for p in files if p.suffix.lower() in suffixes]

        logger.info(f"Found {len(files)} files in {directory}")

        documents = []
        for file in files:
            try:
                documents.append(FileSystemDocumentLoader.load_document(file, parser))
            except Exception as e:
                logger.warning(f"Failed to load document from {file}: {e}")

        return documents
