"""
User equivalence checker.

Decides whether a user decoded from a server response is a correct
representation of the user that was sent. The server may reorder
collections, reformat paths and encrypt secrets, so a plain equality
check is not enough.
"""
from collections import Counter
from typing import Callable, Iterable, Iterator, List, Sequence, Tuple

from ..crypto import compare_secret
from ..exceptions import MismatchKind, UserMismatchError
from ..logging import get_logger
from ..models import ExtensionsFilter, User, VirtualFolder
from ..path import clean_path

logger = get_logger(__name__)


def _same_members(expected: Sequence[str], actual: Sequence[str]) -> bool:
    """Size equality plus membership of every expected item."""
    if len(expected) != len(actual):
        return False
    return all(item in actual for item in expected)


def _folder_pairs(folders: Sequence[VirtualFolder]) -> Iterator[Tuple[str, str]]:
    for folder in folders:
        yield clean_path(folder.virtual_path), clean_path(folder.mapped_path)


class UserChecker:
    """
    Ordered pipeline of independent checks.
    
    The first failing check raises a UserMismatchError naming the
    field; later checks are not run.
    """
    
    def __init__(self):
        self.steps: List[Callable[[User, User], None]] = [
            self.check_password,
            self.check_identity,
            self.check_permissions,
            self.check_filters,
            self.check_filesystem,
            self.check_virtual_folders,
            self.check_fields,
        ]
    
    def check(self, expected: User, actual: User) -> None:
        """
        Runs every step against the two users.
        
        Raises:
            UserMismatchError: actual does not match expected
        """
        try:
            for step in self.steps:
                step(expected, actual)
        except UserMismatchError as e:
            e.actual = actual
            logger.info("user %r mismatch (%s): %s", expected.username, e.kind.value, e)
            raise
    
    @staticmethod
    def check_password(expected: User, actual: User) -> None:
        if actual.password:
            raise UserMismatchError(MismatchKind.SECRET, "user password must not be visible")
    
    @staticmethod
    def check_identity(expected: User, actual: User) -> None:
        if expected.id <= 0:
            if actual.id <= 0:
                raise UserMismatchError(MismatchKind.IDENTITY, "actual user ID must be > 0")
        elif actual.id != expected.id:
            raise UserMismatchError(
                MismatchKind.IDENTITY,
                f"user ID mismatch: got {actual.id} want {expected.id}"
            )
    
    @staticmethod
    def check_permissions(expected: User, actual: User) -> None:
        if len(expected.permissions) != len(actual.permissions):
            raise UserMismatchError(MismatchKind.PERMISSIONS, "permissions mismatch")
        for directory, perms in expected.permissions.items():
            if directory not in actual.permissions:
                raise UserMismatchError(
                    MismatchKind.PERMISSIONS,
                    f"permissions directories mismatch: {directory!r} not found"
                )
            actual_perms = actual.permissions[directory]
            if len(actual_perms) != len(perms):
                raise UserMismatchError(
                    MismatchKind.PERMISSIONS,
                    f"permissions contents mismatch for {directory!r}"
                )
            for perm in actual_perms:
                if perm not in perms:
                    raise UserMismatchError(
                        MismatchKind.PERMISSIONS,
                        f"permissions contents mismatch for {directory!r}: unexpected {perm!r}"
                    )
    
    def check_filters(self, expected: User, actual: User) -> None:
        lists = (
            ('allowed IP', expected.filters.allowed_ip, actual.filters.allowed_ip),
            ('denied IP', expected.filters.denied_ip, actual.filters.denied_ip),
            ('denied login methods', expected.filters.denied_login_methods,
             actual.filters.denied_login_methods),
        )
        for name, want, got in lists:
            if len(want) != len(got):
                raise UserMismatchError(MismatchKind.FILTERS, f"{name} mismatch")
        for name, want, got in lists:
            for item in want:
                if item not in got:
                    raise UserMismatchError(MismatchKind.FILTERS, f"{name} contents mismatch")
        self.check_extensions_filters(
            expected.filters.file_extensions, actual.filters.file_extensions
        )
    
    @staticmethod
    def check_extensions_filters(
        expected: Sequence[ExtensionsFilter],
        actual: Sequence[ExtensionsFilter]
    ) -> None:
        if len(expected) != len(actual):
            raise UserMismatchError(MismatchKind.FILTERS, "file extensions mismatch")
        for want in expected:
            path = clean_path(want.path)
            candidates = [f for f in actual if clean_path(f.path) == path]
            if not candidates:
                raise UserMismatchError(
                    MismatchKind.FILTERS,
                    f"file extensions contents mismatch: path {want.path!r} not found"
                )
            for got in candidates:
                if (not _same_members(want.allowed_extensions, got.allowed_extensions)
                        or not _same_members(want.denied_extensions, got.denied_extensions)):
                    raise UserMismatchError(
                        MismatchKind.FILTERS,
                        f"file extensions contents mismatch for {want.path!r}"
                    )
    
    def check_filesystem(self, expected: User, actual: User) -> None:
        if expected.filesystem.provider != actual.filesystem.provider:
            raise UserMismatchError(MismatchKind.FILESYSTEM, "fs provider mismatch")
        self.check_s3_config(expected, actual)
        self.check_gcs_config(expected, actual)
    
    @staticmethod
    def check_s3_config(expected: User, actual: User) -> None:
        want = expected.filesystem.s3config
        got = actual.filesystem.s3config
        for name in ('bucket', 'region', 'access_key'):
            if getattr(want, name) != getattr(got, name):
                raise UserMismatchError(
                    MismatchKind.FILESYSTEM, f"S3 {name.replace('_', ' ')} mismatch"
                )
        compare_secret(want.access_secret, got.access_secret, 'S3')
        for name in ('endpoint', 'storage_class', 'upload_part_size', 'upload_concurrency'):
            if getattr(want, name) != getattr(got, name):
                raise UserMismatchError(
                    MismatchKind.FILESYSTEM, f"S3 {name.replace('_', ' ')} mismatch"
                )
        if not _key_prefix_matches(want.key_prefix, got.key_prefix):
            raise UserMismatchError(MismatchKind.FILESYSTEM, "S3 key prefix mismatch")
    
    @staticmethod
    def check_gcs_config(expected: User, actual: User) -> None:
        want = expected.filesystem.gcsconfig
        got = actual.filesystem.gcsconfig
        if want.bucket != got.bucket:
            raise UserMismatchError(MismatchKind.FILESYSTEM, "GCS bucket mismatch")
        if want.storage_class != got.storage_class:
            raise UserMismatchError(MismatchKind.FILESYSTEM, "GCS storage class mismatch")
        if not _key_prefix_matches(want.key_prefix, got.key_prefix):
            raise UserMismatchError(MismatchKind.FILESYSTEM, "GCS key prefix mismatch")
        if want.automatic_credentials != got.automatic_credentials:
            raise UserMismatchError(MismatchKind.FILESYSTEM, "GCS automatic credentials mismatch")
    
    @staticmethod
    def check_virtual_folders(expected: User, actual: User) -> None:
        if len(expected.virtual_folders) != len(actual.virtual_folders):
            raise UserMismatchError(MismatchKind.VIRTUAL_FOLDERS, "virtual folders mismatch")
        wanted = Counter(_folder_pairs(expected.virtual_folders))
        got = Counter(_folder_pairs(actual.virtual_folders))
        if wanted != got:
            missing = sorted((wanted - got).elements())
            extra = sorted((got - wanted).elements())
            raise UserMismatchError(
                MismatchKind.VIRTUAL_FOLDERS,
                f"virtual folders mismatch: missing {missing} unexpected {extra}"
            )
    
    @staticmethod
    def check_fields(expected: User, actual: User) -> None:
        for name in _SCALAR_FIELDS:
            want = getattr(expected, name)
            got = getattr(actual, name)
            if want != got:
                raise UserMismatchError(
                    MismatchKind.FIELDS, f"{name} mismatch: got {got!r} want {want!r}"
                )
        if len(expected.permissions) != len(actual.permissions):
            raise UserMismatchError(MismatchKind.FIELDS, "permissions mismatch")


_SCALAR_FIELDS: Iterable[str] = (
    'username',
    'home_dir',
    'uid',
    'gid',
    'max_sessions',
    'quota_size',
    'quota_files',
    'upload_bandwidth',
    'download_bandwidth',
    'status',
    'expiration_date',
)


def _key_prefix_matches(expected: str, actual: str) -> bool:
    # the server appends a trailing slash to non empty prefixes
    return actual == expected or actual == expected + '/'


_default_checker = UserChecker()


def check_user(expected: User, actual: User) -> None:
    """Checks actual against expected with the default pipeline."""
    _default_checker.check(expected, actual)
