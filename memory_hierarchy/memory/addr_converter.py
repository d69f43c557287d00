def addr_to_block(addr: int, block_size: int) -> int:
    """Block (or page) number of ``addr``; doubles as the stored tag."""
    return addr // block_size


def addr_to_index(addr: int, block_size: int, num_slots: int) -> int:
    return addr_to_block(addr, block_size) % num_slots


__all__ = ["addr_to_block", "addr_to_index"]
