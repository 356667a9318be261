"""Topic normalisation and fuzzy matching"""


def normalize_topic(topic: str) -> str:
    return topic.lower().strip()


def topics_match(topic1: str, topic2: str) -> bool:
    """
    True when the normalized topics are equal or one contains the other,
    e.g. "run" matches "long run".

    Very short topics match almost anything ("a" is inside most words).
    """
    normalized1 = normalize_topic(topic1)
    normalized2 = normalize_topic(topic2)

    if normalized1 == normalized2:
        return True

    return normalized1 in normalized2 or normalized2 in normalized1
