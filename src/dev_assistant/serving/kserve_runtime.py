"""KServe custom model runtime for the developer assistant."""

from __future__ import annotations

from typing import Any

import kserve

from dev_assistant.bootstrap import Components, build_components, configure_logging, run_startup_ingestion
from dev_assistant.config import Settings, settings as default_settings


class DevAssistantModel(kserve.Model):
    """KServe-compatible model that wraps the query facade.

    Documents are ingested once in :meth:`load`, before KServe marks the
    model ready and routes traffic to it.
    """

    def __init__(self, name: str = "dev-assistant", settings: Settings = default_settings) -> None:
        super().__init__(name)
        self.settings = settings
        self.components: Components | None = None
        self.ready = False

    def load(self) -> None:
        """Build collaborators and ingest documents (called once at startup)."""
        self.components = build_components(self.settings)
        run_startup_ingestion(self.components, self.settings)
        self.ready = True

    def predict(self, payload: dict[str, Any], headers: dict[str, str] | None = None) -> dict:
        """Answer every instance in *payload*.

        Parameters
        ----------
        payload:
            ``{"instances": [{"question": "..."}]}``.
        headers:
            Optional HTTP headers.

        Returns
        -------
        dict
            ``{"predictions": [{"answer": "..."}]}``
        """
        instances = payload.get("instances", [])
        predictions = []

        for instance in instances:
            response = self.components.facade.ask(instance.get("question"))
            predictions.append(response.model_dump())

        return {"predictions": predictions}


if __name__ == "__main__":
    configure_logging(default_settings)
    model = DevAssistantModel()
    model.load()
    kserve.ModelServer().start([model])
