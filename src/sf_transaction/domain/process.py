"""Declarative transaction process graph.

A graph is data: state name -> outgoing {transition name -> next state}. The
graph validates itself on construction so a malformed table fails at import.

Wire names: transitions carry the 'transition/' prefix, states are bare
('offer-pending'). Bare transition names and 'state/'-prefixed states are
normalised on the way in.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from src.sf_common.enums import ProcessName, TransactionRole, TransitionActor
from src.sf_common.errors import IllegalTransitionError, TransitionNotAllowedError

TRANSITION_PREFIX = "transition/"
STATE_PREFIX = "state/"


def normalize_transition(name: str) -> str:
    return name if name.startswith(TRANSITION_PREFIX) else f"{TRANSITION_PREFIX}{name}"


def normalize_state(name: str) -> str:
    return name[len(STATE_PREFIX):] if name.startswith(STATE_PREFIX) else name


@dataclass(frozen=True)
class StateNode:
    transitions: Mapping[str, str] = field(default_factory=dict)
    terminal: bool = False


@dataclass(frozen=True)
class ProcessGraph:
    id: str
    name: ProcessName
    initial_state: str
    states: Mapping[str, StateNode]
    actors: Mapping[str, TransitionActor]  # the process's transition vocabulary
    privileged: frozenset[str] = frozenset()
    offer_transitions: frozenset[str] = frozenset()
    refund_transitions: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        if self.initial_state not in self.states:
            raise ValueError(f"{self.id}: initial state {self.initial_state} not defined")
        for state, node in self.states.items():
            if node.terminal and node.transitions:
                raise ValueError(f"{self.id}: terminal state {state} has outgoing transitions")
            if not node.terminal and not node.transitions:
                raise ValueError(f"{self.id}: non-terminal state {state} has no transitions")
            for transition, target in node.transitions.items():
                if transition not in self.actors:
                    raise ValueError(f"{self.id}: {transition} not in process vocabulary")
                if target not in self.states:
                    raise ValueError(f"{self.id}: {transition} targets unknown state {target}")
        for name, subset in (
            ("privileged", self.privileged),
            ("offer", self.offer_transitions),
            ("refund", self.refund_transitions),
        ):
            unknown = subset - self.actors.keys()
            if unknown:
                raise ValueError(f"{self.id}: unknown {name} transitions {sorted(unknown)}")

    # --- queries ---

    @property
    def vocabulary(self) -> frozenset[str]:
        return frozenset(self.actors)

    def has_state(self, state: str) -> bool:
        return normalize_state(state) in self.states

    def is_terminal(self, state: str) -> bool:
        node = self.states.get(normalize_state(state))
        return bool(node and node.terminal)

    def next_transitions(self, state: str) -> list[str]:
        node = self.states.get(normalize_state(state))
        return list(node.transitions) if node else []

    def is_privileged(self, transition: str) -> bool:
        return normalize_transition(transition) in self.privileged

    def is_offer_transition(self, transition: str) -> bool:
        return normalize_transition(transition) in self.offer_transitions

    def is_refunded(self, transition: str) -> bool:
        return normalize_transition(transition) in self.refund_transitions

    def actor_for(self, transition: str) -> TransitionActor | None:
        return self.actors.get(normalize_transition(transition))

    # --- transitions ---

    def apply(self, state: str, transition: str) -> str:
        """Return the next state, or raise IllegalTransitionError."""
        current = normalize_state(state)
        name = normalize_transition(transition)
        node = self.states.get(current)
        if node is None or name not in node.transitions:
            raise IllegalTransitionError(current, name)
        return node.transitions[name]

    def replay(self, transitions: Iterable[str]) -> str:
        """State reached by applying ``transitions`` in order from the initial state."""
        state = self.initial_state
        for transition in transitions:
            state = self.apply(state, transition)
        return state

    def state_after(self, last_transition: str | None) -> str:
        """State a transaction is in given only its last transition."""
        if last_transition is None:
            return self.initial_state
        name = normalize_transition(last_transition)
        for node in self.states.values():
            if name in node.transitions:
                return node.transitions[name]
        raise IllegalTransitionError(self.initial_state, name)

    def ensure_actor(self, transition: str, role: TransactionRole) -> None:
        """A user role may only invoke transitions whose actor is that role."""
        actor = self.actor_for(transition)
        if actor is None or actor.value != role.value:
            raise TransitionNotAllowedError(normalize_transition(transition), role.value)
