"""
Serving — FastAPI application and KServe runtime for the assistant.

Both surfaces ingest the documents directory once at startup and then
answer questions through :class:`~dev_assistant.assistant.QueryFacade`.
"""
