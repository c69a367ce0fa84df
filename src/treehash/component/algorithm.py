import enum
import hashlib

import treehash.intern.dbc as dbc


class HashAlgorithm(enum.Enum):
    """
    The supported hash algorithms. The value of a member is (identifier, hashlib name, digest size in bytes).
    """

    MD5 = ("MD5", "md5", 16)
    SHA1 = ("SHA1", "sha1", 20)
    SHA256 = ("SHA256", "sha256", 32)
    SHA384 = ("SHA384", "sha384", 48)
    SHA512 = ("SHA512", "sha512", 64)

    @property
    def algorithm_id(self) -> str:
        return self.value[0]

    @property
    def digest_size(self) -> int:
        return self.value[2]

    def new_state(self) -> "HashState":
        """
        Creates a fresh hash state for this algorithm.

        Returns:
            HashState: A hash state that has not been fed any data.
        """
        return HashState(self)

    @classmethod
    def from_id(cls, algorithm_id: str) -> "HashAlgorithm":
        """
        Looks up an algorithm by its identifier, ignoring case.

        Args:
            algorithm_id (str): E.g. "sha256" or "SHA256". None selects the default SHA1.

        Returns:
            HashAlgorithm: The matching algorithm.

        Raises:
            UsageError: If the identifier is unknown.
        """
        if algorithm_id is None:
            return DEFAULT_ALGORITHM
        for algorithm in cls:
            if algorithm.algorithm_id == algorithm_id.upper():
                return algorithm
        dbc.raise_error({"msg": "UNKNOWN_ARGUMENT", "argument": algorithm_id})

    @classmethod
    def ids(cls) -> list[str]:
        return [algorithm.algorithm_id for algorithm in cls]


DEFAULT_ALGORITHM: HashAlgorithm = HashAlgorithm.SHA1


class HashState:
    """
    A streaming hash over hashlib. It is fed by update() in order and read exactly once by finalize().
    """

    def __init__(self, algorithm: HashAlgorithm):
        self.algorithm: HashAlgorithm = algorithm
        self.init()

    def init(self) -> None:
        """Resets the state to the digest of zero input bytes."""
        self._hash = hashlib.new(self.algorithm.value[1])
        self._finalized = False

    def update(self, data: bytes) -> None:
        dbc.assert_true(not self._finalized,
                        {"msg": "INVALID_STATE", "algorithm": self.algorithm_id}, user_error=False)
        self._hash.update(data)

    def finalize(self) -> bytes:
        """
        Returns the digest. The state must not be used afterwards.

        Returns:
            bytes: The digest, digest_size bytes long.
        """
        dbc.assert_true(not self._finalized,
                        {"msg": "INVALID_STATE", "algorithm": self.algorithm_id}, user_error=False)
        self._finalized = True
        return self._hash.digest()

    @property
    def digest_size(self) -> int:
        return self.algorithm.digest_size

    @property
    def algorithm_id(self) -> str:
        return self.algorithm.algorithm_id
