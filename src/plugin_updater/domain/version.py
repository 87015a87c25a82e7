"""Version comparison and compatibility checks.

Plugin versions are compared with packaging.Version; a release's
``requires`` field is matched against the host system version with
packaging.specifiers.
"""

from packaging.specifiers import InvalidSpecifier, SpecifierSet
from packaging.version import InvalidVersion, Version


def compare_versions(version1: str, version2: str) -> int:
    """Compare two version strings.

    Returns -1 if version1 < version2, 0 if equal, 1 if version1 > version2.
    Uses packaging.Version for robust semantic handling.
    """
    v1_clean = version1.strip().lstrip("v").lower()
    v2_clean = version2.strip().lstrip("v").lower()

    if v1_clean == v2_clean:
        return 0

    try:
        v1 = Version(v1_clean)
        v2 = Version(v2_clean)
    except InvalidVersion:
        # Fallback to legacy numeric comparison
        def parse_version(v: str) -> list[int]:
            try:
                return [int(x) for x in v.split(".")]
            except ValueError:
                return [0, 0, 0]

        v1_parts = parse_version(v1_clean)
        v2_parts = parse_version(v2_clean)
        max_len = max(len(v1_parts), len(v2_parts))
        v1_parts.extend([0] * (max_len - len(v1_parts)))
        v2_parts.extend([0] * (max_len - len(v2_parts)))
        return (v1_parts > v2_parts) - (v1_parts < v2_parts)

    return (v1 > v2) - (v1 < v2)


def is_compatible(requires: str | None, system_version: str | None) -> bool:
    """Check whether a release requirement accepts the system version.

    Args:
        requires: Requirement expression, e.g. ">=1.2, <2.0" or "1.2"
            (a bare version means "at least this version")
        system_version: Version of the host application; None or "0.0.0"
            disables the check

    Returns:
        True when compatible or when either side is unspecified

    """
    if not requires or requires.strip() in ("", "*"):
        return True
    if not system_version or system_version == "0.0.0":
        return True

    expression = requires.strip()
    if expression[0].isdigit():
        expression = f">={expression}"

    try:
        specifier = SpecifierSet(expression)
        return Version(system_version.lstrip("v")) in specifier
    except (InvalidSpecifier, InvalidVersion):
        return False
