import json
import logging
from collections import deque
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

from wetcher.domain.cycle_result import CycleResult
from wetcher.domain.job import Job
from wetcher.domain.resource import PathResource, Resource, UrlResource
from wetcher.domain.result import iter_errors
from wetcher.exceptions import FetchError, ParseError
from wetcher.services.continuation_resolver import ContinuationResolver
from wetcher.services.document_parser import DocumentParser
from wetcher.services.fetcher_factory import FetcherFactory
from wetcher.services.target_evaluator import TargetEvaluator

logger = logging.getLogger(__name__)


def expand_continuation(base: UrlResource, continuation: str) -> UrlResource:
    """Build the next URL by rewriting the path of the request URL.

    Scheme and host always come from `base`. A continuation path starting
    with "/" replaces the whole path; any other non-empty path replaces the
    final path segment; an empty path keeps the request path. Query and
    fragment are taken from the continuation.
    """
    base_parts = urlsplit(base.url)
    cont = urlsplit(continuation)
    if cont.path.startswith("/"):
        path = cont.path
    elif cont.path:
        head, _, _ = base_parts.path.rpartition("/")
        path = f"{head}/{cont.path}"
    else:
        path = base_parts.path or "/"
    return UrlResource(urlunsplit((base_parts.scheme, base_parts.netloc, path, cont.query, cont.fragment)))


class CrawlDriver:
    """Runs one polling cycle of a job.

    Owns the cycle control-flow: a FIFO queue seeded with the job's base
    resource, drained breadth-first over discovered continuations. A failure
    on one resource is logged and the drain moves on. It does NOT construct
    its collaborators (that stays in the DI layer).
    """

    def __init__(
        self,
        *,
        fetcher_factory: FetcherFactory,
        document_parser: DocumentParser,
        target_evaluator: TargetEvaluator,
        continuation_resolver: ContinuationResolver,
        max_resources_per_cycle: Optional[int] = None,
    ):
        self.fetcher_factory = fetcher_factory
        self.document_parser = document_parser
        self.target_evaluator = target_evaluator
        self.continuation_resolver = continuation_resolver
        self.max_resources_per_cycle = max_resources_per_cycle

    def run_cycle(self, job: Job) -> CycleResult:
        if job is None:
            raise ValueError("job is required for a crawl cycle")

        queue: deque[Resource] = deque([job.resource])
        visited = 0
        failed = 0
        followed = 0
        while queue:
            if self.max_resources_per_cycle is not None and visited + failed >= self.max_resources_per_cycle:
                logger.warning(
                    "Job %s reached %s resources this cycle; dropping %s queued resource(s)",
                    job.name,
                    self.max_resources_per_cycle,
                    len(queue),
                )
                break
            resource = queue.popleft()
            try:
                next_resources = self.process_resource(job, resource)
            except (FetchError, ParseError) as e:
                logger.warning("Job %s: %s", job.name, e)
                failed += 1
                continue
            except Exception as e:
                logger.error("Job %s: error while handling %s: %s", job.name, resource, e, exc_info=True)
                failed += 1
                continue
            visited += 1
            followed += len(next_resources)
            queue.extend(next_resources)

        return CycleResult(resources_visited=visited, resources_failed=failed, continuations_followed=followed)

    def process_resource(self, job: Job, resource: Resource) -> list[Resource]:
        """Fetch, parse and evaluate one resource; return the resources to visit next."""
        logger.info("Job %s: performing request for %s", job.name, resource)
        document = self.fetcher_factory.fetch(resource)
        logger.debug("Job %s: received %s chars from %s in %.3fs", job.name, len(document.text), resource, document.elapsed.total_seconds())
        if document.status_code is not None and not 200 <= document.status_code < 300:
            logger.warning("Non-success status for %s: %s", resource, document.status_code)

        root = self.document_parser.parse(document.text, job.parser, resource=resource)

        result = self.target_evaluator.evaluate([root], job.targets)
        for path, error in iter_errors(result):
            logger.warning("Job %s: target %s failed on %s: %s", job.name, path, resource, error.error)
        logger.info("Job %s: found in %s: %s", job.name, resource, json.dumps(result.to_data(), indent=2, ensure_ascii=False))

        resolution = self.continuation_resolver.resolve(root, job.continuation)
        if resolution.error is not None:
            logger.warning("Job %s: continuation failed on %s: %s", job.name, resource, resolution.error)
        continuations = resolution.continuations
        logger.info("Job %s: found continuations: %s", job.name, continuations)
        return self.expand(resource, continuations)

    def expand(self, resource: Resource, continuations: list[str]) -> list[Resource]:
        if not continuations:
            return []
        if isinstance(resource, UrlResource):
            return [expand_continuation(resource, continuation) for continuation in continuations]
        if isinstance(resource, PathResource):
            logger.warning("Path resource %s does not support continuation; ignoring %s", resource, continuations)
            return []
        raise TypeError(f"Unknown resource type: {type(resource).__name__}")
