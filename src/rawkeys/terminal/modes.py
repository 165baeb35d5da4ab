"""Raw-mode attribute derivation.

Computes the raw attribute set from a captured snapshot. The derivation
is a pure function of its inputs: the snapshot is never modified and the
same inputs always produce an equal result.
"""

from __future__ import annotations

import termios

from rawkeys.domain.models import (
    FlagGroup,
    RawModeProfile,
    TerminalAttributes,
    TerminalMode,
)

DEFAULT_PROFILE = RawModeProfile()


def _mask_for(modes: frozenset[TerminalMode], group: FlagGroup) -> int:
    mask = 0
    for mode in modes:
        if mode.group is group:
            mask |= mode.mask
    return mask


def derive_raw(
    attrs: TerminalAttributes,
    profile: RawModeProfile = DEFAULT_PROFILE,
) -> TerminalAttributes:
    """Return the raw-mode variant of ``attrs``.

    Options in ``profile.disable`` are cleared, options in
    ``profile.enable`` are set, and the VMIN/VTIME slots are replaced by
    ``profile.min_bytes`` and ``profile.read_timeout``. All other bits
    and control characters are carried over unchanged.

    Args:
        attrs: The original terminal attributes.
        profile: Which options to switch. Defaults to the canonical
                 raw-mode baseline.

    Returns:
        A new TerminalAttributes; ``attrs`` is left untouched.
    """
    update: dict[str, object] = {}
    for group in FlagGroup:
        flags = attrs.flags(group)
        flags &= ~_mask_for(profile.disable, group)
        flags |= _mask_for(profile.enable, group)
        update[group.value] = flags

    cc = list(attrs.cc)
    cc[termios.VMIN] = profile.min_bytes
    cc[termios.VTIME] = profile.read_timeout
    update["cc"] = tuple(cc)

    return attrs.model_copy(update=update)
