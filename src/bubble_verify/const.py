ERRORS = {
  "E_MALFORMED_INPUT": "Improperly formatted input",
  "E_CHECKSUM_MISMATCH": "Embedded Bubble Babble checksum invalid",
  "E_FILE_MISSING": "No such file",
  "E_DIGEST_SOURCE": "Digest could not be computed",
  "E_HASH_MISMATCH": "Computed checksum does not match manifest",
}

DEFAULT_ALGORITHM = "sha256"
DEFAULT_JOBS = 1

# Read size for streaming file digests
CHUNK_SIZE = 1024 * 1024  # 1 MiB

# Environment overrides for CLI options
ENV_ALGORITHM = "BUBBLESUM_ALGORITHM"
ENV_JOBS = "BUBBLESUM_JOBS"
