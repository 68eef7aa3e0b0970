def common_prefix(*names: str) -> str:
    "Given multiple strings, return their longest common prefix, or the empty string if there is none."
    if not names:
        return ""
    names = sorted(set(names))
    if len(names) == 1:
        return names[0]
    first = names[0]
    last = names[-1]
    for i, ch in enumerate(first):
        if ch != last[i]:  # first differing character
            return first[:i]
    # the first string is a prefix of the last one
    return first
