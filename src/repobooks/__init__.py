# ABOUTME: Repobooks builds EPUB books from the markdown folders of a git repository.
# ABOUTME: Exports the version string; subpackages hold discovery, rendering, and the CLI.

__version__ = "0.1.0"
