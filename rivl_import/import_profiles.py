"""Import option profiles for the RIVL importer.

An ImportOptions instance controls how strictly a RIVL document is
read. The format itself is fixed; what varies between callers is how
much damage they are willing to tolerate in a file:

- numbers that are not quite numbers ("1.0f", "abc")
- declarations that break the format's guarantees (missing ofs/num,
  references to placeholders, arrays running past the end of the .bin)

Profiles are registered in a global dict and selected by name, e.g.
``import_rivl(path, profile="strict")``.

Adding a profile:
    register_profile("mine", ImportOptions(strict_numbers=True))
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from .exceptions import RivlError

# Contract violation policies
CONTRACT_RAISE = "raise"
CONTRACT_PLACEHOLDER = "placeholder"


@dataclass(frozen=True)
class ImportOptions:
    """Settings for one import."""

    # Reject numeric tokens that are not complete numbers. When False they
    # read like C atof/atol (numeric prefix, else 0) and a warning is recorded.
    strict_numbers: bool = False

    # What to do when a declaration breaks a format guarantee:
    #   "raise"       = abort the import with ContractViolationError
    #   "placeholder" = store a placeholder for the declaration, record an error
    contract_violations: str = CONTRACT_RAISE

    # Map the .bin file read/write instead of read-only.
    writable_blob: bool = False

    # Check that every mesh array lies inside the .bin file.
    validate_blob_ranges: bool = True

    # Free-form description shown by the CLI.
    notes: str = ""

    def __post_init__(self):
        if self.contract_violations not in (CONTRACT_RAISE, CONTRACT_PLACEHOLDER):
            raise RivlError(
                f"unknown contract violation policy {self.contract_violations!r}"
            )


IMPORT_PROFILES: Dict[str, ImportOptions] = {}


def register_profile(name: str, options: ImportOptions) -> None:
    """Register an options profile under ``name``."""
    IMPORT_PROFILES[name] = options


def get_profile(name: str) -> Optional[ImportOptions]:
    """Look up a profile by name."""
    return IMPORT_PROFILES.get(name)


def get_profile_names() -> List[str]:
    return list(IMPORT_PROFILES)


def resolve_options(options=None, profile=None) -> ImportOptions:
    """Pick the options for an import: explicit options win over a profile name."""
    if options is not None:
        return options
    if profile is None:
        return IMPORT_PROFILES["default"]
    found = get_profile(profile)
    if found is None:
        raise RivlError(
            f"unknown import profile {profile!r} "
            f"(known: {', '.join(get_profile_names())})"
        )
    return found


# ---------------------------------------------------------------------------
# Built-in profiles
# ---------------------------------------------------------------------------

register_profile("default", ImportOptions(
    notes="Lenient numbers, fatal contract violations, read-only blob",
))

register_profile("strict", ImportOptions(
    strict_numbers=True,
    contract_violations=CONTRACT_RAISE,
    notes="Reject malformed numbers and broken declarations",
))

register_profile("lenient", ImportOptions(
    strict_numbers=False,
    contract_violations=CONTRACT_PLACEHOLDER,
    notes="Keep going: broken declarations become placeholders",
))
