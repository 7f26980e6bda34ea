"""Domain objects for wetcher - explicit re-exports to satisfy linters."""
from .resource import PathResource as PathResource
from .resource import Resource as Resource
from .resource import UrlResource as UrlResource
from .job import Each as Each
from .job import Extractor as Extractor
from .job import Job as Job
from .job import ParserMode as ParserMode
from .job import Ref as Ref
from .job import Single as Single
from .job import TargetTree as TargetTree
from .query import Query as Query
from .query import compile_query as compile_query
from .result import UNKNOWN as UNKNOWN
from .result import EvalError as EvalError
from .result import Group as Group
from .result import Values as Values
from .config import AppConfig as AppConfig
from .config import AppSettings as AppSettings
from .cycle_result import CycleResult as CycleResult
from .fetched_document import FetchedDocument as FetchedDocument

__all__ = [
    "PathResource",
    "Resource",
    "UrlResource",
    "Each",
    "Extractor",
    "Job",
    "ParserMode",
    "Ref",
    "Single",
    "TargetTree",
    "Query",
    "compile_query",
    "UNKNOWN",
    "EvalError",
    "Group",
    "Values",
    "AppConfig",
    "AppSettings",
    "CycleResult",
    "FetchedDocument",
]
