import hashlib
import json


def crypto_hash(*args):
    """
    Return a sha-256 hash of the given arguments.
    Arguments are converted to JSON strings and sorted to ensure deterministic hashing.
    """
    stringified_args = sorted(map(lambda data: json.dumps(data, sort_keys=True), args))
    joined_data = "".join(stringified_args)
    return hashlib.sha256(joined_data.encode("utf-8")).hexdigest()


def record_fingerprint(record: dict, volatile_keys=("calculated_at", "fingerprint")) -> str:
    """
    Hash a serialized record while ignoring fields that change between
    otherwise identical computations (timestamps, the fingerprint itself).
    """
    stable = {key: value for key, value in record.items() if key not in volatile_keys}
    return crypto_hash(stable)
