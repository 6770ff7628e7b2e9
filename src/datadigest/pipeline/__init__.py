"""Synchronous pipeline stages for a digest run."""

from datadigest.pipeline.base import BaseHandler
from datadigest.pipeline.operation_handler import OperationHandler
from datadigest.pipeline.result_builder import ResultBuilder
from datadigest.pipeline.source_handler import DatasetSource

__all__ = ["BaseHandler", "DatasetSource", "OperationHandler", "ResultBuilder"]
