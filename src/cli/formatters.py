"""
CLI formatting functions for the instance report.

This module handles presentation of the selected instances:
- Plain text, one instance per line (optionally with launch time)
- JSON document for tooling that prefers structured output
"""

import json
import sys
from typing import Any, Dict, Iterable, List, Optional, TextIO

from src.domain.instance.value_objects import EnrichedInstance


def format_launch_time(instance: EnrichedInstance) -> str:
    """Render the launch time exactly as AWS reported it (no zone conversion)."""
    return instance.launch_time.isoformat()


def format_instance_lines(instances: Iterable[EnrichedInstance],
                          show_launch_time: bool = False) -> List[str]:
    """Format instances as ``instance_id`` or ``instance_id<TAB>launch_time`` lines."""
    if show_launch_time:
        return [f"{i.instance_id}\t{format_launch_time(i)}" for i in instances]
    return [i.instance_id for i in instances]


def instances_to_dict(instances: Iterable[EnrichedInstance]) -> Dict[str, Any]:
    return {
        "instances": [
            {
                "instance_id": i.instance_id,
                "launch_time": format_launch_time(i),
                "group_name": i.group_name,
            }
            for i in instances
        ]
    }


def format_output(instances: List[EnrichedInstance], format_type: str,
                  show_launch_time: bool = False) -> str:
    """Format instances according to the specified format type."""
    if format_type == "json":
        return json.dumps(instances_to_dict(instances), indent=2)
    return "\n".join(format_instance_lines(instances, show_launch_time))


def report(instances: List[EnrichedInstance],
           show_launch_time: bool = False,
           output_format: str = "text",
           stream: Optional[TextIO] = None) -> None:
    """Write the report to ``stream`` (stdout by default), preserving order."""
    stream = stream or sys.stdout
    if not instances:
        return
    stream.write(format_output(instances, output_format, show_launch_time) + "\n")
    stream.flush()
