"""
State Machines

대출 상태 전이 관리.
상환(record_payment) 경로에서 허용되는 전이만 정의한다.
직접 수정(대출 업데이트)은 상태 머신을 거치지 않는다.
"""

import logging
from enum import Enum

from core.types import LoanStatus

logger = logging.getLogger(__name__)


class StateMachineError(Exception):
    """상태 전이 오류"""
    pass


class StateMachine:
    """상태 머신 기본 클래스

    Args:
        initial_state: 초기 상태
        transitions: 허용된 전이 정의 {from_state: [to_states]}
        name: 머신 이름 (로깅용)
    """

    def __init__(
        self,
        initial_state: str | Enum,
        transitions: dict[str, list[str]],
        name: str = "StateMachine",
    ):
        self._state = initial_state.value if isinstance(initial_state, Enum) else initial_state
        self._transitions = transitions
        self._name = name

    @property
    def state(self) -> str:
        """현재 상태"""
        return self._state

    def can_transition(self, to_state: str | Enum) -> bool:
        """전이 가능 여부 확인"""
        target = to_state.value if isinstance(to_state, Enum) else to_state
        allowed = self._transitions.get(self._state, [])
        return target in allowed

    def transition(self, to_state: str | Enum) -> str:
        """상태 전이

        Args:
            to_state: 목표 상태

        Returns:
            새 상태

        Raises:
            StateMachineError: 허용되지 않은 전이
        """
        target = to_state.value if isinstance(to_state, Enum) else to_state

        if not self.can_transition(target):
            allowed = self._transitions.get(self._state, [])
            raise StateMachineError(
                f"{self._name}: Cannot transition from {self._state} to {target}. "
                f"Allowed: {allowed}"
            )

        old_state = self._state
        self._state = target

        logger.debug(f"{self._name}: {old_state} → {target}")

        return target


class LoanStateMachine(StateMachine):
    """대출 상태 머신 (상환 경로)

    전이 규칙:
    - active → paid_off: 잔액이 0이 되는 상환

    paid_off, defaulted에서는 상환으로 인한 전이가 없다.
    defaulted는 직접 수정으로만 설정 가능.
    """

    TRANSITIONS: dict[str, list[str]] = {
        "active": ["paid_off"],
    }

    def __init__(self, initial_state: str | LoanStatus = LoanStatus.ACTIVE):
        super().__init__(
            initial_state=initial_state,
            transitions=self.TRANSITIONS,
            name="LoanStateMachine",
        )

    @property
    def accepts_payment(self) -> bool:
        """상환 가능 여부"""
        return self._state == LoanStatus.ACTIVE.value
