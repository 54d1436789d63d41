# ABOUTME: End-to-end generation of one collection: clone, tidy, discover, render, clean up.
# ABOUTME: External tools are injected so the same pipeline runs against fakes in tests.

import logging
from collections.abc import Callable
from pathlib import Path

from repobooks.config import BuildSettings, CollectionConfig
from repobooks.core.collection import GenerateResult, build_collection
from repobooks.core.fetcher import (
    NoopCleaner,
    PostFetchCleaner,
    ScriptCleaner,
    VersionControlFetcher,
    remove_checkout,
)
from repobooks.core.renderer import DocumentRenderer
from repobooks.errors import FilesystemError

logger = logging.getLogger(__name__)

# Progress callback: receives one human-readable status line per step.
NotifyFn = Callable[[str], None]


def cleaner_for(settings: BuildSettings) -> PostFetchCleaner:
    """The configured post-fetch script, or a no-op when none is set."""
    if settings.cleanup_script is None:
        return NoopCleaner()
    return ScriptCleaner(settings.cleanup_script)


def generate_collection(
    config: CollectionConfig,
    settings: BuildSettings,
    *,
    fetcher: VersionControlFetcher,
    renderer: DocumentRenderer,
    cleaner: PostFetchCleaner | None = None,
    keep_source: bool = False,
    notify: NotifyFn | None = None,
) -> GenerateResult:
    """Build every book of one repository branch.

    Removes any stale checkout, clones the branch into settings.source_dir,
    runs the post-fetch cleaner, renders each discovered book, and finally
    removes the checkout unless keep_source is set.

    Raises:
        ExternalToolFailure: If cloning or the post-fetch step fails.
        FilesystemError: If the checkout cannot be listed or removed. A
            failure to remove it after another error is only logged.
    """
    say = notify or (lambda message: None)
    source = settings.source_dir
    cleaner = cleaner or cleaner_for(settings)

    if remove_checkout(source):
        say("Cleaning build files")

    try:
        result = _clone_and_render(
            config, settings, fetcher=fetcher, renderer=renderer, cleaner=cleaner, say=say
        )
    except BaseException:
        if not keep_source:
            _discard_after_failure(source)
        raise

    if keep_source:
        logger.info("Keeping checkout at %s", source)
    elif remove_checkout(source):
        say("Cleaning build files")
    return result


def _discard_after_failure(source: Path) -> None:
    """Remove the checkout after a failed run without masking the failure."""
    try:
        remove_checkout(source)
    except FilesystemError as exc:
        logger.warning("%s", exc)


def _clone_and_render(
    config: CollectionConfig,
    settings: BuildSettings,
    *,
    fetcher: VersionControlFetcher,
    renderer: DocumentRenderer,
    cleaner: PostFetchCleaner,
    say: NotifyFn,
) -> GenerateResult:
    source = settings.source_dir
    say(f"Cloning {config.repo_url} ({config.branch})")
    fetcher.clone(config.repo_url, config.branch, source)
    cleaner.clean(source)

    collection = build_collection(
        source,
        name=config.name,
        author=config.author,
        branch=config.branch,
        settings=settings,
    )
    say(f"Generating {len(collection.books)} book(s) into {collection.output_dir}")
    return collection.generate_all(renderer)
