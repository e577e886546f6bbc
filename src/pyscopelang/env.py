"""
ScopeLang Environment
Maps variable names to storage addresses

This module provides an immutable environment class using the dict.copy()
pattern: extending an environment never changes the one it was built from,
so sibling expressions never observe each other's let-bindings.
"""

from __future__ import annotations
from typing import Dict, Optional

from pyscopelang.types import Address
from pyscopelang.errors import ScopeLangError


#==============================================================================
# Address Environment (ρ)
# Maps variable names to the address of their storage cell
#==============================================================================

class Env:
    """
    Immutable address environment.

    Uses dict.copy() pattern to ensure immutability - all operations
    return new Env instances without modifying the original.
    """

    def __init__(self, bindings: Optional[Dict[str, Address]] = None):
        """
        Create a new environment.

        Args:
            bindings: Initial address bindings (optional)
        """
        self._bindings = dict(bindings) if bindings else {}

    @property
    def bindings(self) -> Dict[str, Address]:
        """Return a copy of the bindings to prevent external mutation."""
        return dict(self._bindings)

    def extend(self, name: str, addr: Address) -> "Env":
        """
        Extend the environment with a new binding.
        Returns a new Env without modifying the original; an existing
        binding for the same name is shadowed.

        Args:
            name: Variable name
            addr: Address of the variable's cell

        Returns:
            New Env with the additional binding
        """
        new_bindings = self._bindings.copy()
        new_bindings[name] = addr
        return Env(new_bindings)

    def lookup(self, name: str) -> Optional[Address]:
        """
        Look up an address binding in the environment.

        Args:
            name: Variable name to look up

        Returns:
            Address if found, None otherwise
        """
        return self._bindings.get(name)

    def __contains__(self, name: str) -> bool:
        """Check if a name is bound in the environment."""
        return name in self._bindings

    def __len__(self) -> int:
        """Return the number of bindings."""
        return len(self._bindings)

    def __str__(self) -> str:
        cells = ", ".join(f"{name} -> {addr}" for name, addr in self._bindings.items())
        return f"{{{cells}}}"

    def __repr__(self) -> str:
        return f"Env({self._bindings})"


def empty_env() -> Env:
    """
    Create an empty environment.

    Returns:
        New Env with no bindings
    """
    return Env()


#==============================================================================
# Environment Helper Functions
#==============================================================================

def lookup_address(env: Env, name: str) -> Address:
    """
    Look up the address bound to a variable.

    Raises:
        ScopeLangError: If the variable is not bound
    """
    addr = env.lookup(name)
    if addr is None:
        raise ScopeLangError.undefined_variable(name)
    return addr
