from sqlalchemy.exc import OperationalError
from core.errors import PersistenceError, UpstreamResolutionFailed, ProviderUnavailable

def test_to_dict_leaves_out_the_cause():
    cause = OperationalError("SELECT", {}, Exception("disk I/O error"))
    error = PersistenceError("Failed to store the book", cause=cause)

    assert error.to_dict() == {"error": "persistence_error", "detail": "Failed to store the book"}
    # The cause still shows up where the error is logged
    assert "disk I/O error" in str(error)

def test_to_dict_for_upstream_failure():
    error = UpstreamResolutionFailed("Could not resolve 978", cause=ProviderUnavailable("down"))
    assert error.to_dict()["detail"] == "Could not resolve 978"
