"""
Tracing configuration for Gen-Form.

This module provides tracing setup using the OpenAI Agents SDK's built-in
tracing. Every model invocation runs as an agent, so a form generation
shows up as one trace with one agent span per attempted model.

Tracing is off by default. The SDK's default exporter ships traces to the
OpenAI dashboard, which needs an OpenAI key the Gemini deployment lacks, so
setup_tracing always replaces it. Tracing state is process-wide: configure it
once at startup with setup_tracing, or let the first orchestrator apply the
configured settings through configure_tracing.
"""

import functools
import json
import logging

from agents import trace, set_tracing_disabled
from agents.tracing import (
    TracingProcessor,
    Trace,
    Span,
    set_trace_processors,
)

from gen_form.config import GenFormConfig

logger = logging.getLogger("gen-form")

_configured = False


class LoggingTracingProcessor(TracingProcessor):
    """
    A tracing processor that writes traces to the gen-form logger.

    Useful for development and debugging.
    """

    def __init__(self, verbose: bool = False):
        """
        Args:
            verbose: If True, log every span as well.
        """
        self.verbose = verbose

    def on_trace_start(self, trace: Trace) -> None:
        logger.info(f"[TRACE START] {trace.name} (ID: {trace.trace_id[:8]}...)")

    def on_trace_end(self, trace: Trace) -> None:
        logger.info(f"[TRACE END] {trace.name}")

    def on_span_start(self, span: Span[object]) -> None:
        if self.verbose:
            logger.debug(f"[SPAN START] {span.span_data.type}")

    def on_span_end(self, span: Span[object]) -> None:
        if self.verbose:
            logger.debug(f"[SPAN END] {span.span_data.type} error={span.error}")

    def shutdown(self) -> None:
        pass

    def force_flush(self) -> None:
        pass


class FileTracingProcessor(TracingProcessor):
    """
    A tracing processor that appends traces to a JSON Lines file.

    Useful for persistent logging and later analysis.
    """

    def __init__(self, file_path: str = "traces.jsonl"):
        self.file_path = file_path
        self._current_traces: dict[str, dict] = {}

    def on_trace_start(self, trace: Trace) -> None:
        self._current_traces[trace.trace_id] = {
            "trace_id": trace.trace_id,
            "name": trace.name,
            "spans": [],
        }

    def on_trace_end(self, trace: Trace) -> None:
        record = self._current_traces.pop(trace.trace_id, None)
        if record is None:
            return
        with open(self.file_path, "a", encoding="utf-8") as f:
            f.write(json.dumps(record) + "\n")

    def on_span_start(self, span: Span[object]) -> None:
        pass

    def on_span_end(self, span: Span[object]) -> None:
        record = self._current_traces.get(span.trace_id)
        if record is not None:
            record["spans"].append({
                "span_id": span.span_id,
                "type": span.span_data.type,
                "data": span.span_data.export(),
                "error": span.error,
            })

    def shutdown(self) -> None:
        pass

    def force_flush(self) -> None:
        pass


def setup_tracing(
    enabled: bool = True,
    console: bool = True,
    verbose: bool = False,
    file_path: str | None = None,
) -> None:
    """
    Configure tracing for Gen-Form.

    Args:
        enabled: Whether tracing is enabled.
        console: Whether to write traces to the gen-form logger.
        verbose: Whether to log individual spans.
        file_path: Optional JSON Lines file to append traces to.

    Example:
        >>> from gen_form.tracing import setup_tracing
        >>> setup_tracing(console=True, file_path="traces.jsonl")
    """
    global _configured
    _configured = True

    if not enabled:
        set_tracing_disabled(True)
        return

    set_tracing_disabled(False)

    processors: list[TracingProcessor] = []

    if console:
        processors.append(LoggingTracingProcessor(verbose=verbose))

    if file_path:
        processors.append(FileTracingProcessor(file_path=file_path))

    # Replaces the default OpenAI exporter even when no processor is chosen
    set_trace_processors(processors)


def configure_tracing(config: GenFormConfig) -> None:
    """Apply the configured tracing settings unless tracing was already set up."""
    if _configured:
        return
    setup_tracing(
        enabled=config.enable_tracing,
        console=config.trace_to_console,
        file_path=config.trace_file,
    )


def disable_tracing() -> None:
    """Disable all tracing."""
    set_tracing_disabled(True)


def enable_tracing() -> None:
    """Enable tracing with whatever processors are installed."""
    set_tracing_disabled(False)


def trace_form_generation(func):
    """Decorator to run an async generation call inside one trace."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        with trace("form_generation"):
            return await func(*args, **kwargs)

    return wrapper
