"""
Snapshot Conversion Example

Recognize the components of a saved page and export an Elementor document.
"""
import json
import sys
from pathlib import Path

from widgetize.core.dom.capture import load_snapshot
from widgetize.core.models.config import Config
from widgetize.core.service import ConversionService


def main(snapshot_path: str, output_path: str = "page.json"):
    config = Config()
    config.export.page_title = "Imported Landing Page"
    service = ConversionService(config)

    snapshot = load_snapshot(snapshot_path)
    result = service.convert(snapshot)

    # Recognized component types and how often each appeared
    for type_name, count in sorted(result.stats.by_type.items()):
        print(f"{type_name:>16}: {count}")

    Path(output_path).write_text(json.dumps(result.document, indent=2))
    print(f"Wrote {result.stats.widgets} widgets in {result.stats.sections} sections to {output_path}")

    if result.partial:
        print("Some subtrees could not be read")


if __name__ == "__main__":
    main(*sys.argv[1:])
