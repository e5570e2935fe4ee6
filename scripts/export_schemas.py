"""Export JSON schemas for saved plan documents and oracle replies."""

import json
from pathlib import Path

from tripcraft.llm.schemas import SCHEMAS
from tripcraft.models import SavedPlan, TravelPlan


def main() -> None:
    """Export schemas to docs/schemas/."""
    schemas_dir = Path("docs/schemas")
    schemas_dir.mkdir(parents=True, exist_ok=True)

    # Pydantic models, camelCase as written to plan files
    for model in (TravelPlan, SavedPlan):
        path = schemas_dir / f"{model.__name__}.schema.json"
        with open(path, "w") as f:
            json.dump(model.model_json_schema(by_alias=True), f, indent=2)
        print(f"Exported {model.__name__} schema to {path}")

    # Structured-output schemas sent to the oracle
    for name, schema in SCHEMAS.items():
        path = schemas_dir / f"oracle.{name}.schema.json"
        with open(path, "w") as f:
            json.dump(schema, f, indent=2)
        print(f"Exported oracle schema {name} to {path}")


if __name__ == "__main__":
    main()
