"""Snapshot loader - read the exported JSON collections into a Snapshot."""

import json
from pathlib import Path
from typing import Any, Type, TypeVar

from pydantic import ValidationError

from agent_analytics.config import AnalyticsConfig
from agent_analytics.models.agent import Agent
from agent_analytics.models.base import RecordModel
from agent_analytics.models.enquiry import Enquiry
from agent_analytics.models.property import Property
from agent_analytics.models.snapshot import Snapshot
from agent_analytics.utils.errors import MalformedInputError, SnapshotError, SnapshotNotFoundError
from agent_analytics.utils.logging import get_structured_logger, log_timing

logger = get_structured_logger(__name__)

RecordT = TypeVar("RecordT", bound=RecordModel)


def read_collection(path: Path) -> dict[str, Any]:
    """Read one exported collection; it must be a JSON object keyed by document ID."""
    try:
        with open(path, encoding="utf-8") as handle:
            document = json.load(handle)
    except FileNotFoundError as e:
        raise SnapshotNotFoundError(f"Snapshot file not found: {path}") from e
    except OSError as e:
        raise SnapshotError(f"Cannot read snapshot file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise MalformedInputError(f"Invalid JSON in {path}: {e}", path=str(path)) from e
    except UnicodeDecodeError as e:
        raise MalformedInputError(f"Snapshot file is not UTF-8: {path}", path=str(path)) from e

    if not isinstance(document, dict):
        raise MalformedInputError(
            f"Expected a JSON object keyed by ID in {path}, got {type(document).__name__}",
            path=str(path),
        )
    return document


def parse_records(raw: dict[str, Any], model: Type[RecordT], collection: str) -> dict[str, RecordT]:
    """
    Build records for one collection.

    Documents that are not objects or fail validation are skipped and logged.
    """
    records: dict[str, RecordT] = {}
    skipped = 0
    for record_id, document in raw.items():
        if not isinstance(document, dict):
            skipped += 1
            logger.warning(
                "Skipping non-object document",
                collection=collection,
                record_id=record_id,
                document_type=type(document).__name__,
            )
            continue
        try:
            records[record_id] = model.model_validate(document)
        except ValidationError as e:
            skipped += 1
            logger.warning(
                "Skipping invalid document",
                collection=collection,
                record_id=record_id,
                error=str(e),
            )
    if skipped:
        logger.info("Documents skipped", collection=collection, skipped=skipped)
    return records


def snapshot_from_documents(
    agents: dict[str, Any],
    enquiries: dict[str, Any],
    properties: dict[str, Any],
) -> Snapshot:
    """Snapshot from already-decoded collections."""
    for name, raw in (("agents", agents), ("enquiries", enquiries), ("properties", properties)):
        if not isinstance(raw, dict):
            raise MalformedInputError(f"Collection '{name}' must be an object keyed by ID")
    return Snapshot(
        agents=parse_records(agents, Agent, "agents"),
        enquiries=parse_records(enquiries, Enquiry, "enquiries"),
        properties=parse_records(properties, Property, "properties"),
    )


def load_snapshot(config: AnalyticsConfig) -> Snapshot:
    """Load agents, enquiries and properties from the configured data directory."""
    with log_timing("load_snapshot", logger=logger, data_dir=str(config.data_dir)):
        snapshot = snapshot_from_documents(
            read_collection(config.agents_path),
            read_collection(config.enquiries_path),
            read_collection(config.properties_path),
        )
    logger.info(
        "Snapshot loaded",
        agents=len(snapshot.agents),
        enquiries=len(snapshot.enquiries),
        properties=len(snapshot.properties),
    )
    return snapshot
