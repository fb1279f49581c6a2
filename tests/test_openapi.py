def test_search_documents_error_responses(make_client, make_recorder):
    client = make_client(make_recorder())

    schema = client.get("/openapi.json").json()
    responses = schema["paths"]["/search"]["get"]["responses"]

    assert {"200", "400", "429", "500", "502"} <= set(responses)
    assert "422" not in responses
    assert "ErrorResponse" in schema["components"]["schemas"]
    assert {t["name"] for t in schema["tags"]} >= {"Search", "Health"}
