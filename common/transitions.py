from common.exceptions import InvalidTransition


def check_transition(transitions: dict, current: str, target: str) -> None:
    """
    transitions: {현재 상태: {이동 가능한 상태들}}
    허용되지 않은 이동이면 InvalidTransition(409)
    """
    allowed = transitions.get(current, frozenset())
    if target not in allowed:
        raise InvalidTransition(f"'{current}' 상태에서 '{target}' 상태로 변경할 수 없습니다.")
