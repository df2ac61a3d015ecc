# api_client_utils/payloads.py - builds the JSON action messages sent with APIClient.do_post
import json

DEFAULT_VERSION = 6

def build_action(action, version=DEFAULT_VERSION, **params):
    """
    Serialize an action request as compact JSON.

    build_action("deckNamesAndIds") -> '{"action":"deckNamesAndIds","version":6}'
    Keyword arguments, if any, are sent under "params".
    """
    if not action or not str(action).strip():
        raise ValueError("action must be a non-empty string")
    payload = {"action": action, "version": version}
    if params:
        payload["params"] = params
    return json.dumps(payload, separators=(",", ":"))
