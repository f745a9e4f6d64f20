from forms.admin_forms import UploadForm
from secure_action import ADMIN_ROLES, ActionError, create_secure_action
from uploads import UPLOAD_ENDPOINTS, save_uploads


def upload_files(endpoint_name, payload):
    """Store the ``files`` of ``payload`` under the rules of ``endpoint_name``."""
    def run(data, ctx):
        endpoint = UPLOAD_ENDPOINTS.get(endpoint_name)
        if endpoint is None:
            raise ActionError("Unknown upload endpoint", 404)
        return {"files": save_uploads(endpoint, data.get("files") or [])}

    return create_secure_action(payload, UploadForm, ADMIN_ROLES, run,
                                name=f"UPLOAD_{endpoint_name.upper().replace('-', '_')}")
