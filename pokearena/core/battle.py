"""Turn-based battle state machine for player-vs-CPU battles.

Lifecycle of a battle:
    idle -> resolving_turn -> idle
                           -> awaiting_forced_switch -> idle
                           -> awaiting_switch_prompt -> idle
                           -> battle_ended

A whole turn is resolved synchronously and returned as an ordered list of
TurnEvents. Pacing those events for display is the caller's job; nothing
in here sleeps or waits.
"""

from __future__ import annotations

import logging
import random
import uuid
from enum import Enum

from pydantic import BaseModel, Field

from pokearena.core.abilities import AbilityEffect, format_ability_name
from pokearena.core.cpu import select_cpu_move, select_cpu_switch_target, should_cpu_switch
from pokearena.core.damage import calculate_damage, check_accuracy, effective_speed
from pokearena.core.items import Inventory, Item, apply_item, item_refusal
from pokearena.core.moves import (
    SELF_TARGETS,
    Move,
    MoveStatChange,
    StatusCondition,
    VolatileCondition,
    effectiveness_message,
)
from pokearena.core.pokemon import BattlePokemon, BattleTeam
from pokearena.core.stages import STAGE_STATS, stat_change_message
from pokearena.core.status import (
    BlockReason,
    block_message,
    can_act,
    confusion_self_damage,
    end_of_turn_status_damage,
    end_of_turn_status_message,
    initial_status_turns,
    is_immune_to_status,
    is_immune_to_volatile,
    roll_confusion_turns,
    status_inflicted_message,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class BattlePhase(str, Enum):
    """Where the battle is in its lifecycle."""

    IDLE = "idle"  # Waiting for the player's next action
    RESOLVING_TURN = "resolving_turn"  # A turn is in flight; intents are refused
    AWAITING_FORCED_SWITCH = "awaiting_forced_switch"  # Player's active fainted
    AWAITING_SWITCH_PROMPT = "awaiting_switch_prompt"  # CPU's active fainted, replacement hidden
    BATTLE_ENDED = "battle_ended"


class Side(str, Enum):
    PLAYER = "player"
    CPU = "cpu"

    @property
    def other(self) -> Side:
        return Side.CPU if self == Side.PLAYER else Side.PLAYER


class BattleActionType(str, Enum):
    """Types of actions the player can submit."""

    MOVE = "move"
    ITEM = "item"
    SWITCH = "switch"
    KEEP = "keep"  # Decline the switch prompt
    RUN = "run"


# ---------------------------------------------------------------------------
# Supporting models
# ---------------------------------------------------------------------------

class BattleAction(BaseModel):
    """An intent submitted by the player."""

    action_type: BattleActionType
    move_index: int | None = None  # Index into the active Pokemon's moves
    item: Item | None = None
    target_index: int | None = None  # Roster index an item is used on
    switch_to: int | None = None  # Roster index to send out


class TurnEvent(BaseModel):
    """A single narrated event produced while resolving a turn.

    The presentation layer replays these in order.
    """

    event_type: str  # "move", "damage", "miss", "immune", "ability", "status", "stat", "heal",
    # "faint", "switch", "item", "prompt", "run", "end", "info", "refused"
    side: Side | None = None
    pokemon_name: str = ""
    target_name: str = ""
    move_name: str = ""
    damage: int = 0
    effectiveness: float = 1.0
    critical: bool = False
    message: str = ""


class BattleState(BaseModel):
    """The complete state of one player-vs-CPU battle."""

    battle_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    player: BattleTeam
    cpu: BattleTeam
    inventory: Inventory | None = None

    phase: BattlePhase = BattlePhase.IDLE
    turn_number: int = 0
    turn_log: list[list[TurnEvent]] = Field(default_factory=list)

    # Chosen when the CPU's active faints, revealed once the player commits
    pending_cpu_switch: int | None = None

    winner: Side | None = None
    fled: bool = False

    @property
    def is_over(self) -> bool:
        return self.phase == BattlePhase.BATTLE_ENDED

    def team(self, side: Side) -> BattleTeam:
        return self.player if side == Side.PLAYER else self.cpu

    def active(self, side: Side) -> BattlePokemon | None:
        return self.team(side).active_pokemon


# ---------------------------------------------------------------------------
# Turn resolution engine
# ---------------------------------------------------------------------------

class BattleEngine:
    """Owns a BattleState and advances it one player intent at a time.

    Every public method returns the events it produced. Illegal intents are
    refused with a single "refused" event and leave the state untouched.
    """

    def __init__(self, state: BattleState, rng=None):
        self.state = state
        self.rng = rng if rng is not None else random
        self._events: list[TurnEvent] = []

    # -- public API -----------------------------------------------------------

    def use_move(self, move_index: int) -> list[TurnEvent]:
        return self.submit(BattleAction(action_type=BattleActionType.MOVE, move_index=move_index))

    def use_item(self, item: Item, target_index: int | None = None) -> list[TurnEvent]:
        if target_index is None:
            target_index = self.state.player.active_index
        return self.submit(BattleAction(action_type=BattleActionType.ITEM, item=item, target_index=target_index))

    def switch(self, index: int) -> list[TurnEvent]:
        return self.submit(BattleAction(action_type=BattleActionType.SWITCH, switch_to=index))

    def keep(self) -> list[TurnEvent]:
        return self.submit(BattleAction(action_type=BattleActionType.KEEP))

    def run(self) -> list[TurnEvent]:
        return self.submit(BattleAction(action_type=BattleActionType.RUN))

    def submit(self, action: BattleAction) -> list[TurnEvent]:
        """Validate and resolve one player intent."""
        refusal = self._validate(action)
        if refusal:
            logger.debug("Refused %s: %s", action.action_type.value, refusal)
            return [TurnEvent(event_type="refused", side=Side.PLAYER, message=refusal)]

        state = self.state
        self._events = []

        if state.phase in (BattlePhase.AWAITING_FORCED_SWITCH, BattlePhase.AWAITING_SWITCH_PROMPT):
            self._resolve_replacement(action.switch_to)
            state.turn_log.append(self._events)
            return self._events

        state.phase = BattlePhase.RESOLVING_TURN
        state.turn_number += 1
        logger.debug("Turn %d: player chose %s", state.turn_number, action.action_type.value)

        # Flinches only last for the turn they were inflicted in
        self._clear_flinch()

        if action.action_type == BattleActionType.MOVE:
            self._resolve_move_turn(action.move_index or 0)
        elif action.action_type == BattleActionType.ITEM:
            self._resolve_item_turn(action.item, action.target_index)
        elif action.action_type == BattleActionType.SWITCH:
            self._resolve_switch_turn(action.switch_to)
        elif action.action_type == BattleActionType.RUN:
            self._resolve_run()

        if state.phase == BattlePhase.RESOLVING_TURN:
            state.phase = BattlePhase.IDLE

        state.turn_log.append(self._events)
        return self._events

    def opening_events(self) -> list[TurnEvent]:
        """Send-out narration for the start of a battle."""
        cpu_mon = self.state.active(Side.CPU)
        player_mon = self.state.active(Side.PLAYER)
        events = []
        if cpu_mon:
            events.append(self._send_out_event(Side.CPU, cpu_mon))
        if player_mon:
            events.append(self._send_out_event(Side.PLAYER, player_mon))
        return events

    def reset(self) -> list[TurnEvent]:
        """Restart the battle with the same teams (rematch)."""
        state = self.state
        state.player.reset()
        state.cpu.reset()
        if state.inventory is not None:
            state.inventory.reset()
        state.phase = BattlePhase.IDLE
        state.turn_number = 0
        state.turn_log = []
        state.pending_cpu_switch = None
        state.winner = None
        state.fled = False
        logger.info("Battle %s reset for a rematch", state.battle_id)
        return self.opening_events()

    # -- validation -------------------------------------------------------------

    def _validate(self, action: BattleAction) -> str | None:
        """Return a refusal message, or None when the action is legal now."""
        state = self.state
        kind = action.action_type

        if state.phase == BattlePhase.BATTLE_ENDED:
            return "The battle is over."
        if state.phase == BattlePhase.RESOLVING_TURN:
            return "Please wait for the current turn to finish."

        if state.phase == BattlePhase.AWAITING_FORCED_SWITCH:
            if kind != BattleActionType.SWITCH:
                return "You must choose a Pokemon to send out."
            return self._switch_refusal(action.switch_to)

        if state.phase == BattlePhase.AWAITING_SWITCH_PROMPT:
            if kind == BattleActionType.KEEP:
                return None
            if kind != BattleActionType.SWITCH:
                return "Choose whether to switch Pokemon first."
            return self._switch_refusal(action.switch_to)

        if kind == BattleActionType.KEEP:
            return "There is no switch to decline."

        if kind == BattleActionType.MOVE:
            mon = state.player.active_pokemon
            index = action.move_index or 0
            if mon is None or not 0 <= index < len(mon.moves):
                return "That move doesn't exist."
            if not mon.moves[index].has_pp:
                return "There's no PP left for this move!"
            return None

        if kind == BattleActionType.ITEM:
            item = action.item
            index = action.target_index if action.target_index is not None else state.player.active_index
            if item is None:
                return "No item was chosen."
            if not 0 <= index < len(state.player.roster):
                return "That Pokemon isn't on your team."
            if state.inventory is not None:
                owned = state.inventory.get(item.id)
                if owned is None or owned.quantity <= 0:
                    return f"You don't have any {item.name} left."
            return item_refusal(item, state.player.roster[index])

        if kind == BattleActionType.SWITCH:
            return self._switch_refusal(action.switch_to)

        return None

    def _switch_refusal(self, index: int | None) -> str | None:
        team = self.state.player
        if index is None or not 0 <= index < len(team.roster):
            return "That Pokemon isn't on your team."
        if index == team.active_index and not team.roster[index].is_fainted:
            return f"{team.roster[index].display_name} is already in battle!"
        if team.roster[index].is_fainted:
            return f"{team.roster[index].display_name} has no energy left to battle!"
        return None

    # -- turn kinds -------------------------------------------------------------

    def _resolve_move_turn(self, move_index: int) -> None:
        state = self.state
        player_mon = state.active(Side.PLAYER)
        cpu_mon = state.active(Side.CPU)
        assert player_mon is not None and cpu_mon is not None, "both sides need an active Pokemon"

        player_move = player_mon.moves[move_index]
        player_move.use_pp()

        # A switching CPU lets the player's move land first, then switches
        if should_cpu_switch(state.cpu, self.rng):
            acted = self._act(Side.PLAYER, player_move)
            if self._check_faints([Side.CPU, Side.PLAYER]):
                return
            if acted:
                self._cpu_switch()
            self._end_of_turn([Side.PLAYER, Side.CPU])
            return

        cpu_move = select_cpu_move(cpu_mon, self.rng)
        if cpu_move is None:
            self._no_moves_left(cpu_mon)
            return
        cpu_move.use_pp()

        order = self._turn_order(player_move, cpu_move)
        (first_side, first_move), (second_side, second_move) = order
        logger.debug("Turn %d order: %s then %s", state.turn_number, first_side.value, second_side.value)

        acted = self._act(first_side, first_move)
        if self._check_faints([second_side, first_side]):
            return
        if acted:
            self._act(second_side, second_move)
            if self._check_faints([first_side, second_side]):
                return

        self._end_of_turn([first_side, second_side])

    def _resolve_item_turn(self, item: Item | None, target_index: int | None) -> None:
        assert item is not None, "item turns need an item"
        state = self.state
        index = target_index if target_index is not None else state.player.active_index
        target = state.player.roster[index]

        if state.inventory is not None:
            state.inventory.consume(item.id)
        _, message = apply_item(item, target)
        self._emit(
            "item",
            side=Side.PLAYER,
            pokemon_name=target.display_name,
            message=f"{state.player.trainer_name or 'You'} used a {item.name}! {message}",
        )
        self._cpu_turn()

    def _resolve_switch_turn(self, index: int | None) -> None:
        assert index is not None, "switch turns need a target"
        old = self.state.active(Side.PLAYER)
        if old is not None and not old.is_fainted:
            self._emit("switch", side=Side.PLAYER, pokemon_name=old.display_name,
                       message=f"{old.display_name}, come back!")
        self._send_out(Side.PLAYER, index)
        self._cpu_turn()

    def _resolve_run(self) -> None:
        state = self.state
        player_mon = state.active(Side.PLAYER)
        cpu_mon = state.active(Side.CPU)
        assert player_mon is not None and cpu_mon is not None, "both sides need an active Pokemon"

        # Base speed on purpose: stages and paralysis do not matter here
        if player_mon.base_stat("speed") >= cpu_mon.base_stat("speed"):
            self._emit("run", side=Side.PLAYER, pokemon_name=player_mon.display_name,
                       message="Got away safely!")
            state.fled = True
            state.winner = None
            state.phase = BattlePhase.BATTLE_ENDED
            logger.info("Battle %s ended: player fled", state.battle_id)
        else:
            self._emit("run", side=Side.PLAYER, pokemon_name=player_mon.display_name,
                       message="Can't escape!")

    def _resolve_replacement(self, switch_to: int | None) -> None:
        """Finish a forced switch or a switch prompt, then reveal the CPU's pick."""
        state = self.state
        if switch_to is not None:
            old = state.active(Side.PLAYER)
            if old is not None and not old.is_fainted:
                self._emit("switch", side=Side.PLAYER, pokemon_name=old.display_name,
                           message=f"{old.display_name}, come back!")
            self._send_out(Side.PLAYER, switch_to)

        if state.pending_cpu_switch is not None:
            self._send_out(Side.CPU, state.pending_cpu_switch)
            state.pending_cpu_switch = None

        state.phase = BattlePhase.IDLE

    def _cpu_turn(self) -> None:
        """The CPU acts alone after a player item use or switch."""
        state = self.state
        cpu_mon = state.active(Side.CPU)
        assert cpu_mon is not None, "CPU needs an active Pokemon"

        if should_cpu_switch(state.cpu, self.rng):
            self._cpu_switch()
        else:
            cpu_move = select_cpu_move(cpu_mon, self.rng)
            if cpu_move is None:
                self._no_moves_left(cpu_mon)
                return
            cpu_move.use_pp()
            self._act(Side.CPU, cpu_move)
            if self._check_faints([Side.PLAYER, Side.CPU]):
                return

        self._end_of_turn([Side.PLAYER, Side.CPU])

    # -- ordering -----------------------------------------------------------------

    def _turn_order(self, player_move: Move, cpu_move: Move) -> list[tuple[Side, Move]]:
        """Priority first, then effective speed, then a coin flip."""
        player_first = [(Side.PLAYER, player_move), (Side.CPU, cpu_move)]
        cpu_first = [(Side.CPU, cpu_move), (Side.PLAYER, player_move)]

        if player_move.priority != cpu_move.priority:
            return player_first if player_move.priority > cpu_move.priority else cpu_first

        player_speed = effective_speed(self.state.active(Side.PLAYER))
        cpu_speed = effective_speed(self.state.active(Side.CPU))
        if player_speed != cpu_speed:
            return player_first if player_speed > cpu_speed else cpu_first

        return player_first if self.rng.random() < 0.5 else cpu_first

    # -- acting -------------------------------------------------------------------

    def _act(self, side: Side, move: Move) -> bool:
        """Try to use move. Returns False if a status or condition blocked it."""
        mon = self.state.active(side)
        check = can_act(mon, self.rng)

        if check.woke_up:
            mon.cure_status()
            self._emit("status", side=side, pokemon_name=mon.display_name,
                       message=f"{mon.display_name} woke up!")
        if check.thawed:
            mon.cure_status()
            self._emit("status", side=side, pokemon_name=mon.display_name,
                       message=f"{mon.display_name} thawed out!")

        if not check.allowed:
            self._apply_block(side, mon, check.reason)
            return False

        self._use_move(side, move)
        return True

    def _apply_block(self, side: Side, mon: BattlePokemon, reason: BlockReason) -> None:
        damage = 0
        if reason == BlockReason.CONFUSION:
            damage = mon.take_damage(confusion_self_damage(mon))
        elif reason == BlockReason.FLINCH:
            mon.remove_volatile(VolatileCondition.FLINCH)
        self._emit("status", side=side, pokemon_name=mon.display_name, damage=damage,
                   message=block_message(reason, mon.display_name))

    def _use_move(self, side: Side, move: Move) -> None:
        attacker = self.state.active(side)
        defender = self.state.active(side.other)

        self._emit("move", side=side, pokemon_name=attacker.display_name,
                   target_name=defender.display_name, move_name=move.display_name,
                   message=f"{attacker.display_name} used {move.display_name}!")

        if move.is_status or not move.power:
            self._use_status_move(side, attacker, defender, move)
            return

        if not check_accuracy(move, attacker, defender, self.rng):
            self._emit("miss", side=side, pokemon_name=attacker.display_name,
                       message=f"{attacker.display_name}'s attack missed!")
            return

        result = calculate_damage(attacker, defender, move, self.rng)

        if result.ability_effect:
            self._apply_ability_effect(side.other, defender, result.ability_effect)
            return

        if result.effectiveness == 0:
            self._emit("immune", side=side.other, pokemon_name=defender.display_name,
                       effectiveness=0.0,
                       message=effectiveness_message(0, defender.display_name))
            return

        dealt = defender.take_damage(result.damage)
        self._emit("damage", side=side.other, pokemon_name=defender.display_name,
                   move_name=move.display_name, damage=dealt,
                   effectiveness=result.effectiveness, critical=result.is_critical,
                   message=f"{defender.display_name} took {dealt} damage!")

        if result.is_critical:
            self._emit("info", side=side, message="A critical hit!")
        eff_msg = effectiveness_message(result.effectiveness, defender.display_name)
        if eff_msg:
            self._emit("info", side=side, effectiveness=result.effectiveness, message=eff_msg)

        if move.drain_percent:
            self._apply_drain(side, attacker, defender, move, dealt)

        if defender.is_fainted:
            return
        self._apply_secondary_effects(side, attacker, defender, move)

    def _apply_drain(
        self, side: Side, attacker: BattlePokemon, defender: BattlePokemon, move: Move, dealt: int
    ) -> None:
        amount = int(dealt * abs(move.drain_percent) / 100)
        if move.drain_percent > 0:
            healed = attacker.heal(amount)
            if healed > 0:
                self._emit("heal", side=side, pokemon_name=attacker.display_name,
                           message=f"{defender.display_name} had its energy drained!")
        else:
            recoil = attacker.take_damage(amount)
            if recoil > 0:
                self._emit("damage", side=side, pokemon_name=attacker.display_name,
                           damage=recoil,
                           message=f"{attacker.display_name} is damaged by recoil!")

    def _apply_secondary_effects(
        self, side: Side, attacker: BattlePokemon, defender: BattlePokemon, move: Move
    ) -> None:
        """Status, confusion, flinch and stat changes after a damaging hit."""
        target_side = side.other

        # PokeAPI reports 0 for an ailment the hit always inflicts
        if isinstance(move.ailment, StatusCondition) and move.ailment != StatusCondition.NONE:
            if self._roll(move.ailment_chance or 100):
                if not is_immune_to_status(defender, move.ailment):
                    self._inflict_status(target_side, defender, move.ailment)

        if move.ailment == VolatileCondition.CONFUSION:
            if self._roll(move.ailment_chance or 100):
                if not is_immune_to_volatile(defender, VolatileCondition.CONFUSION):
                    self._inflict_confusion(target_side, defender)

        # Silent until it stops the target from moving
        if move.flinch_chance > 0 and self._roll(move.flinch_chance):
            defender.add_volatile(VolatileCondition.FLINCH)

        if move.stat_changes:
            if 0 < move.stat_chance < 100:
                if self._roll(move.stat_chance):
                    self._apply_stat_changes(target_side, defender, move.stat_changes)
            elif not attacker.is_fainted:
                # Unconditional changes on a damaging move are the user's own
                self._apply_stat_changes(side, attacker, move.stat_changes)

    def _use_status_move(
        self, side: Side, attacker: BattlePokemon, defender: BattlePokemon, move: Move
    ) -> None:
        self_targeted = move.target in SELF_TARGETS
        target_side = side if self_targeted else side.other
        target = attacker if self_targeted else defender

        if not self_targeted and not check_accuracy(move, attacker, defender, self.rng):
            self._emit("miss", side=side, pokemon_name=attacker.display_name,
                       message=f"{attacker.display_name}'s attack missed!")
            return

        did_something = False

        if move.healing_percent > 0:
            healed = attacker.heal(int(attacker.max_hp * move.healing_percent / 100))
            if healed > 0:
                self._emit("heal", side=side, pokemon_name=attacker.display_name,
                           message=f"{attacker.display_name} regained health!")
            else:
                self._emit("info", side=side, pokemon_name=attacker.display_name,
                           message=f"{attacker.display_name}'s HP is full!")
            did_something = True

        if isinstance(move.ailment, StatusCondition) and move.ailment != StatusCondition.NONE:
            if self._roll(move.ailment_chance or 100):
                if is_immune_to_status(defender, move.ailment):
                    self._emit("immune", side=side.other, pokemon_name=defender.display_name,
                               message=f"It doesn't affect {defender.display_name}...")
                else:
                    self._inflict_status(side.other, defender, move.ailment)
                did_something = True

        if move.ailment == VolatileCondition.CONFUSION:
            if self._roll(move.ailment_chance or 100):
                if is_immune_to_volatile(defender, VolatileCondition.CONFUSION):
                    self._emit("info", side=side.other, pokemon_name=defender.display_name,
                               message=f"{defender.display_name} is already confused!")
                else:
                    self._inflict_confusion(side.other, defender)
                did_something = True

        if move.stat_changes and self._roll(move.stat_chance or 100):
            self._apply_stat_changes(target_side, target, move.stat_changes)
            did_something = True

        if not did_something:
            self._emit("info", side=side, message="But nothing happened!")

    # -- effect application ------------------------------------------------------

    def _inflict_status(self, side: Side, mon: BattlePokemon, status: StatusCondition) -> None:
        mon.apply_status(status, initial_status_turns(status, self.rng))
        self._emit("status", side=side, pokemon_name=mon.display_name,
                   message=status_inflicted_message(mon.display_name, status))

    def _inflict_confusion(self, side: Side, mon: BattlePokemon) -> None:
        mon.add_volatile(VolatileCondition.CONFUSION, roll_confusion_turns(self.rng))
        self._emit("status", side=side, pokemon_name=mon.display_name,
                   message=f"{mon.display_name} became confused!")

    def _apply_stat_changes(self, side: Side, mon: BattlePokemon, changes: list[MoveStatChange]) -> None:
        for change in changes:
            if change.stat not in STAGE_STATS:
                continue
            self._change_stat(side, mon, change.stat, change.change)

    def _change_stat(self, side: Side, mon: BattlePokemon, stat: str, change: int) -> None:
        result = mon.change_stat(stat, change)
        shown = change if result.maxed_out else result.actual_change
        if shown == 0:
            return
        self._emit("stat", side=side, pokemon_name=mon.display_name,
                   message=stat_change_message(mon.display_name, stat, shown, result.maxed_out))

    def _apply_ability_effect(self, side: Side, mon: BattlePokemon, effect: AbilityEffect) -> None:
        """The move was absorbed by an ability: no damage, no secondary effects."""
        ability = format_ability_name(effect.ability_name)
        self._emit("ability", side=side, pokemon_name=mon.display_name, effectiveness=0.0,
                   message=f"[{mon.display_name}'s {ability}]")

        narrated = False
        if effect.healing > 0:
            healed = mon.heal(effect.healing)
            if healed > 0:
                self._emit("heal", side=side, pokemon_name=mon.display_name,
                           message=f"{mon.display_name} restored {healed} HP!")
                narrated = True

        if effect.stat_boost:
            stat, stages = effect.stat_boost
            self._change_stat(side, mon, stat, stages)
            narrated = True

        if effect.type_boost:
            if mon.flash_fire_active:
                message = f"{mon.display_name}'s {ability} is already active!"
            else:
                mon.flash_fire_active = True
                message = f"The power of {mon.display_name}'s {effect.type_boost.capitalize()}-type moves rose!"
            self._emit("ability", side=side, pokemon_name=mon.display_name, message=message)
            narrated = True

        if not narrated:
            self._emit("immune", side=side, pokemon_name=mon.display_name, effectiveness=0.0,
                       message=f"It doesn't affect {mon.display_name}...")

    # -- end of turn, fainting, switching -----------------------------------------

    def _end_of_turn(self, order: list[Side]) -> None:
        """Status damage and counter ticking for each Pokemon still standing."""
        for side in order:
            mon = self.state.active(side)
            if mon is None or mon.is_fainted:
                continue

            if mon.status in (StatusCondition.BURN, StatusCondition.POISON, StatusCondition.BADLY_POISONED):
                status = mon.status
                dealt = mon.take_damage(end_of_turn_status_damage(mon))
                if status == StatusCondition.BADLY_POISONED:
                    mon.status_turns += 1
                self._emit("status", side=side, pokemon_name=mon.display_name, damage=dealt,
                           message=end_of_turn_status_message(mon.display_name, status))
                if mon.is_fainted:
                    continue

            if mon.status == StatusCondition.SLEEP and mon.status_turns > 0:
                mon.status_turns -= 1

            if mon.has_volatile(VolatileCondition.CONFUSION):
                mon.confusion_turns -= 1
                if mon.confusion_turns <= 0:
                    mon.remove_volatile(VolatileCondition.CONFUSION)
                    self._emit("status", side=side, pokemon_name=mon.display_name,
                               message=f"{mon.display_name} snapped out of its confusion!")

        self._check_faints(order)

    def _check_faints(self, order: list[Side]) -> bool:
        """Handle any fainted active Pokemon. Returns True if anything fainted.

        Sides are examined in the given order; when both teams are wiped out
        the first one listed loses.
        """
        state = self.state
        fainted = [s for s in order if state.active(s) is not None and state.active(s).is_fainted]
        if not fainted:
            return False

        for side in fainted:
            mon = state.active(side)
            mon.volatile_conditions = set()
            self._emit("faint", side=side, pokemon_name=mon.display_name,
                       message=f"{mon.display_name} fainted!")

        for side in fainted:
            if not state.team(side).has_usable_pokemon:
                self._end_battle(side.other)
                return True

        player_fainted = Side.PLAYER in fainted
        if Side.CPU in fainted:
            target = select_cpu_switch_target(state.cpu)
            logger.debug("CPU pre-selected replacement index %s", target)
            if player_fainted or state.player.has_switch_option:
                state.pending_cpu_switch = target
                if not player_fainted:
                    state.phase = BattlePhase.AWAITING_SWITCH_PROMPT
                    self._emit("prompt", side=Side.CPU,
                               message=f"{state.cpu.trainer_name or 'The opponent'} is about to send in "
                                       f"a new Pokemon. Will you change Pokemon?")
            else:
                self._send_out(Side.CPU, target)

        if player_fainted:
            state.phase = BattlePhase.AWAITING_FORCED_SWITCH
            self._emit("prompt", side=Side.PLAYER, message="Choose a Pokemon to send out!")

        return True

    def _cpu_switch(self) -> None:
        state = self.state
        target = select_cpu_switch_target(state.cpu)
        if target is None:
            return
        old = state.active(Side.CPU)
        self._emit("switch", side=Side.CPU, pokemon_name=old.display_name,
                   message=f"{state.cpu.trainer_name or 'The opponent'} withdrew {old.display_name}!")
        self._send_out(Side.CPU, target)

    def _send_out(self, side: Side, index: int) -> None:
        mon = self.state.team(side).switch_to(index)
        self._events.append(self._send_out_event(side, mon))

    def _send_out_event(self, side: Side, mon: BattlePokemon) -> TurnEvent:
        if side == Side.PLAYER:
            message = f"Go! {mon.display_name}!"
        else:
            message = f"{self.state.cpu.trainer_name or 'The opponent'} sent out {mon.display_name}!"
        return TurnEvent(event_type="switch", side=side, pokemon_name=mon.display_name, message=message)

    def _no_moves_left(self, cpu_mon: BattlePokemon) -> None:
        self._emit("info", side=Side.CPU, pokemon_name=cpu_mon.display_name,
                   message=f"{cpu_mon.display_name} has no moves left!")
        self._end_battle(Side.PLAYER)

    def _end_battle(self, winner: Side) -> None:
        state = self.state
        state.phase = BattlePhase.BATTLE_ENDED
        state.winner = winner
        state.pending_cpu_switch = None
        name = state.team(winner).trainer_name or winner.value.capitalize()
        self._emit("end", side=winner, message=f"{name} wins the battle!")
        logger.info("Battle %s ended on turn %d, winner: %s", state.battle_id, state.turn_number, winner.value)

    # -- helpers -------------------------------------------------------------------

    def _clear_flinch(self) -> None:
        for side in (Side.PLAYER, Side.CPU):
            mon = self.state.active(side)
            if mon is not None:
                mon.remove_volatile(VolatileCondition.FLINCH)

    def _roll(self, chance: int) -> bool:
        """Percent chance roll."""
        return self.rng.random() * 100 < chance

    def _emit(self, event_type: str, **fields) -> None:
        self._events.append(TurnEvent(event_type=event_type, **fields))


def create_battle(
    player_roster: list[BattlePokemon],
    cpu_roster: list[BattlePokemon],
    player_name: str = "You",
    cpu_name: str = "CPU",
    inventory: Inventory | None = None,
) -> BattleState:
    """Build a fresh BattleState with both leads out."""
    return BattleState(
        player=BattleTeam(trainer_name=player_name, roster=player_roster),
        cpu=BattleTeam(trainer_name=cpu_name, roster=cpu_roster),
        inventory=inventory,
    )
