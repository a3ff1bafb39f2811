"""Folder names of families in the generated workspace."""

from contracts import Family


_SIBILANT_ENDINGS = ("s", "x", "z", "ch", "sh")
_VOWELS = "aeiou"


class FamilyFolderNameProvider:
    """Derives a family's folder from its name: the plural form ('Repository' -> 'Repositories')."""

    def folder_name(self, family_name: str) -> str:
        if not family_name:
            return family_name
        lower = family_name.lower()
        if lower.endswith("y") and len(lower) > 1 and lower[-2] not in _VOWELS:
            return family_name[:-1] + "ies"
        if lower.endswith(_SIBILANT_ENDINGS):
            return family_name + "es"
        return family_name + "s"

    def folder(self, family: Family) -> str:
        """Folder of `family`: its override when set, the derived name otherwise."""
        if family.folder:
            return family.folder
        return self.folder_name(family.name)
