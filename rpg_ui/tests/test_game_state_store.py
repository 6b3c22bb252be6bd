"""
Tests for the game state store.

Covers every mutation, the notification contract (one publish per mutation,
ordering, re-entrant mutations) and the message log rules.
"""
import os
import sys
import unittest
from dataclasses import FrozenInstanceError
from unittest.mock import patch

# Add the project root to the Python path
root_dir = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.append(root_dir)

from rpg_ui.state.game_state_store import GameStateStore
from rpg_ui.state.models import (
    Enemy,
    Equipment,
    EquipmentHand,
    GameState,
    Inventory,
    Item,
    ItemStack,
    MessageLevel,
    PlayerStats,
)


class RecordingObserver:
    """Observer that keeps every snapshot it receives."""

    def __init__(self):
        self.snapshots = []

    def __call__(self, state):
        self.snapshots.append(state)

    @property
    def last(self):
        return self.snapshots[-1]


class TestInitialState(unittest.TestCase):
    """The snapshot a new store starts from."""

    def test_documented_initial_snapshot(self):
        state = GameStateStore().get()

        self.assertEqual(state.player_stats, PlayerStats(
            health=100, max_health=100, level=1, experience=0, strength=10, defense=5))
        self.assertEqual(state.inventory, Inventory(gold=0, items=()))
        self.assertIsNone(state.equipment.main_hand)
        self.assertIsNone(state.equipment.off_hand)
        self.assertEqual(state.messages, ())
        self.assertIsNone(state.current_enemy)
        self.assertFalse(state.is_in_battle)
        self.assertFalse(state.is_inventory_open)
        self.assertFalse(state.is_equipment_open)
        self.assertFalse(state.is_skills_open)
        self.assertEqual(state.selected_item_index, 0)
        self.assertIsNone(state.selected_equipment_slot)

    def test_custom_player_stats(self):
        store = GameStateStore(player_stats=PlayerStats(health=40, max_health=40))
        self.assertEqual(store.get().player_stats.max_health, 40)


class TestSubscription(unittest.TestCase):
    """Observer registration and notification."""

    def setUp(self):
        self.store = GameStateStore()

    def test_subscribe_delivers_current_snapshot(self):
        observer = RecordingObserver()
        self.store.subscribe(observer)

        self.assertEqual(len(observer.snapshots), 1)
        self.assertIs(observer.last, self.store.get())

    def test_one_notification_per_mutation(self):
        observer = RecordingObserver()
        self.store.subscribe(observer)

        self.store.toggle_inventory()
        self.store.set_selected_item_index(3)
        self.store.remove_from_inventory("missing")

        self.assertEqual(len(observer.snapshots), 4)
        self.assertTrue(observer.snapshots[1].is_inventory_open)
        self.assertEqual(observer.snapshots[2].selected_item_index, 3)

    def test_no_op_mutations_still_notify(self):
        observer = RecordingObserver()
        self.store.add_message("Hello", MessageLevel.INFO)
        self.store.subscribe(observer)

        self.store.add_message("Hello", MessageLevel.INFO)
        self.store.unequip_item(EquipmentHand.MAIN_HAND)

        self.assertEqual(len(observer.snapshots), 3)
        self.assertEqual(observer.snapshots[1], observer.snapshots[0])

    def test_observers_notified_in_registration_order(self):
        calls = []
        self.store.subscribe(lambda state: calls.append("first"))
        self.store.subscribe(lambda state: calls.append("second"))
        calls.clear()

        self.store.toggle_skills()

        self.assertEqual(calls, ["first", "second"])

    def test_unsubscribe_stops_notifications(self):
        observer = RecordingObserver()
        unsubscribe = self.store.subscribe(observer)

        self.store.toggle_equipment()
        unsubscribe()
        self.store.toggle_equipment()

        self.assertEqual(len(observer.snapshots), 2)

    def test_unsubscribe_twice_is_harmless(self):
        unsubscribe = self.store.subscribe(RecordingObserver())
        unsubscribe()
        unsubscribe()
        self.store.toggle_inventory()

    def test_failing_observer_does_not_break_mutation(self):
        def broken(state):
            raise RuntimeError("observer failure")

        observer = RecordingObserver()
        with patch('rpg_ui.state.observable.error') as log_error:
            self.store.subscribe(broken)
            self.store.subscribe(observer)
            self.store.toggle_inventory()

        self.assertEqual(len(observer.snapshots), 2)
        self.assertTrue(self.store.get().is_inventory_open)
        self.assertEqual(log_error.call_count, 2)

    def test_mutation_from_observer_runs_after_current_cycle(self):
        seen_by_late = []

        def reacting(state):
            if len(state.messages) == 1:
                self.store.add_message("Second", MessageLevel.INFO)
                # Not applied until every observer has seen the first snapshot
                self.assertEqual(len(self.store.get().messages), 1)

        self.store.subscribe(reacting)
        self.store.subscribe(lambda state: seen_by_late.append(len(state.messages)))

        self.store.add_message("First", MessageLevel.INFO)

        self.assertEqual(seen_by_late, [0, 1, 2])
        self.assertEqual([m.text for m in self.store.get().messages], ["First", "Second"])

    def test_snapshots_are_immutable(self):
        state = self.store.get()
        with self.assertRaises(FrozenInstanceError):
            state.is_inventory_open = True

    def test_previous_snapshot_not_changed_by_mutation(self):
        before = self.store.get()
        self.store.add_to_inventory(Item(id="sword"))
        self.store.toggle_inventory()

        self.assertEqual(before.inventory.items, ())
        self.assertFalse(before.is_inventory_open)


class TestInventory(unittest.TestCase):

    def setUp(self):
        self.store = GameStateStore()

    def test_add_never_merges_stacks(self):
        potion = Item(id="potion")
        self.store.add_to_inventory(potion)
        self.store.add_to_inventory(potion)

        items = self.store.get().inventory.items
        self.assertEqual(len(items), 2)
        self.assertEqual(items[0], ItemStack(item=potion, count=1))
        self.assertEqual(items[1], ItemStack(item=potion, count=1))

    def test_add_keeps_order(self):
        self.store.add_to_inventory(Item(id="sword"))
        self.store.add_to_inventory(Item(id="shield"))

        ids = [stack.item.id for stack in self.store.get().inventory.items]
        self.assertEqual(ids, ["sword", "shield"])

    def test_remove_drops_every_stack_of_item(self):
        self.store.add_to_inventory(Item(id="potion"))
        self.store.add_to_inventory(Item(id="sword"))
        self.store.add_to_inventory(Item(id="potion"))

        self.store.remove_from_inventory("potion")

        ids = [stack.item.id for stack in self.store.get().inventory.items]
        self.assertEqual(ids, ["sword"])

    def test_remove_is_idempotent(self):
        self.store.add_to_inventory(Item(id="potion"))
        self.store.add_to_inventory(Item(id="sword"))

        self.store.remove_from_inventory("potion")
        after_first = self.store.get().inventory
        self.store.remove_from_inventory("potion")

        self.assertEqual(self.store.get().inventory, after_first)

    def test_remove_unknown_item_is_no_op(self):
        self.store.add_to_inventory(Item(id="sword"))
        before = self.store.get().inventory

        self.store.remove_from_inventory("does-not-exist")

        self.assertEqual(self.store.get().inventory, before)

    def test_gold_untouched_by_item_changes(self):
        self.store.add_to_inventory(Item(id="sword"))
        self.store.remove_from_inventory("sword")
        self.assertEqual(self.store.get().inventory.gold, 0)


class TestEquipment(unittest.TestCase):

    def setUp(self):
        self.store = GameStateStore()
        self.sword = Item(id="sword", name="Short Sword")
        self.axe = Item(id="axe", name="Hand Axe")

    def test_equip_overwrites_slot(self):
        self.store.equip_item(self.sword, EquipmentHand.MAIN_HAND)
        self.store.equip_item(self.axe, EquipmentHand.MAIN_HAND)

        equipment = self.store.get().equipment
        self.assertEqual(equipment.main_hand, self.axe)
        self.assertNotIn(self.sword, [item for _, item in equipment.items()])

    def test_overwritten_item_not_returned_to_inventory(self):
        self.store.equip_item(self.sword, EquipmentHand.MAIN_HAND)
        self.store.equip_item(self.axe, EquipmentHand.MAIN_HAND)
        self.assertEqual(self.store.get().inventory.items, ())

    def test_slots_are_independent(self):
        self.store.equip_item(self.sword, EquipmentHand.MAIN_HAND)
        self.store.equip_item(self.axe, EquipmentHand.OFF_HAND)

        equipment = self.store.get().equipment
        self.assertEqual(equipment.main_hand, self.sword)
        self.assertEqual(equipment.off_hand, self.axe)

    def test_slot_names_accepted(self):
        self.store.equip_item(self.sword, "offHand")
        self.assertEqual(self.store.get().equipment.off_hand, self.sword)

    def test_unequip_clears_slot(self):
        self.store.equip_item(self.sword, EquipmentHand.MAIN_HAND)
        self.store.unequip_item(EquipmentHand.MAIN_HAND)
        self.assertIsNone(self.store.get().equipment.main_hand)

    def test_unknown_slot_is_ignored(self):
        self.store.equip_item(self.sword, EquipmentHand.MAIN_HAND)
        observer = RecordingObserver()
        self.store.subscribe(observer)

        self.store.equip_item(self.axe, "head")
        self.store.unequip_item("feet")

        self.assertEqual(self.store.get().equipment, Equipment(main_hand=self.sword))
        self.assertEqual(len(observer.snapshots), 3)


class TestMessageLog(unittest.TestCase):

    def setUp(self):
        self.store = GameStateStore()

    def test_message_gets_id_and_timestamp(self):
        self.store.add_message("Welcome!", MessageLevel.SUCCESS)

        message = self.store.get().messages[0]
        self.assertEqual(message.text, "Welcome!")
        self.assertEqual(message.level, MessageLevel.SUCCESS)
        self.assertTrue(message.id)
        self.assertGreater(message.timestamp, 0)

    def test_ids_are_unique(self):
        for i in range(20):
            self.store.add_message(f"Message {i}", MessageLevel.INFO)
        ids = [m.id for m in self.store.get().messages]
        self.assertEqual(len(set(ids)), 20)

    def test_consecutive_duplicate_is_dropped(self):
        self.store.add_message("Hit!", MessageLevel.COMBAT)
        first = self.store.get().messages[0]
        self.store.add_message("Hit!", MessageLevel.COMBAT)

        messages = self.store.get().messages
        self.assertEqual(len(messages), 1)
        self.assertEqual(messages[0], first)

    def test_non_consecutive_duplicate_is_kept(self):
        self.store.add_message("Hit!", MessageLevel.COMBAT)
        self.store.add_message("Miss!", MessageLevel.COMBAT)
        self.store.add_message("Hit!", MessageLevel.COMBAT)

        texts = [m.text for m in self.store.get().messages]
        self.assertEqual(texts, ["Hit!", "Miss!", "Hit!"])

    def test_same_text_different_level_is_kept(self):
        self.store.add_message("Careful", MessageLevel.INFO)
        self.store.add_message("Careful", MessageLevel.WARNING)
        self.assertEqual(len(self.store.get().messages), 2)

    def test_level_given_as_string(self):
        self.store.add_message("Hit!", "combat")
        self.store.add_message("Hit!", MessageLevel.COMBAT)

        messages = self.store.get().messages
        self.assertEqual(len(messages), 1)
        self.assertIs(messages[0].level, MessageLevel.COMBAT)

    def test_log_keeps_last_fifty(self):
        for i in range(51):
            self.store.add_message(f"Hit {i}!", MessageLevel.COMBAT)

        messages = self.store.get().messages
        self.assertEqual(len(messages), 50)
        self.assertEqual(messages[0].text, "Hit 1!")
        self.assertEqual(messages[-1].text, "Hit 50!")

    def test_log_never_exceeds_limit(self):
        for i in range(120):
            self.store.add_message(f"Tick {i % 7}", MessageLevel.INFO)
            self.assertLessEqual(len(self.store.get().messages), 50)

    def test_configurable_limit(self):
        store = GameStateStore(message_log_limit=3)
        for text in ["a", "b", "c", "d"]:
            store.add_message(text, MessageLevel.INFO)
        self.assertEqual([m.text for m in store.get().messages], ["b", "c", "d"])

    def test_zero_limit_from_config_keeps_default_bound(self):
        with patch('rpg_ui.state.game_state_store.get_config', return_value=0):
            store = GameStateStore()

        for i in range(60):
            store.add_message(f"Swing {i}", MessageLevel.COMBAT)

        self.assertEqual(store.message_log_limit, 50)
        self.assertEqual(len(store.get().messages), 50)

    def test_explicit_zero_limit_is_not_treated_as_unset(self):
        with patch('rpg_ui.state.game_state_store.get_config', return_value=7) as config:
            store = GameStateStore(message_log_limit=0)

        config.assert_not_called()
        self.assertEqual(store.message_log_limit, 50)

    def test_timestamps_never_decrease(self):
        with patch('rpg_ui.state.game_state_store.time') as fake_time:
            fake_time.time.side_effect = [100.0, 90.0]
            self.store.add_message("first", MessageLevel.INFO)
            self.store.add_message("second", MessageLevel.INFO)

        first, second = self.store.get().messages
        self.assertEqual(first.timestamp, 100.0)
        self.assertEqual(second.timestamp, 100.0)


class TestSelectionAndPanels(unittest.TestCase):

    def setUp(self):
        self.store = GameStateStore()

    def test_selected_item_index_not_validated(self):
        self.store.set_selected_item_index(-5)
        self.assertEqual(self.store.get().selected_item_index, -5)
        self.store.set_selected_item_index(999)
        self.assertEqual(self.store.get().selected_item_index, 999)

    def test_selected_equipment_slot(self):
        self.store.set_selected_equipment_slot("mainHand")
        self.assertIs(self.store.get().selected_equipment_slot, EquipmentHand.MAIN_HAND)
        self.store.set_selected_equipment_slot(None)
        self.assertIsNone(self.store.get().selected_equipment_slot)

    def test_toggles_are_independent(self):
        self.store.toggle_inventory()
        self.store.toggle_equipment()
        self.store.toggle_skills()

        state = self.store.get()
        self.assertTrue(state.is_inventory_open)
        self.assertTrue(state.is_equipment_open)
        self.assertTrue(state.is_skills_open)

        self.store.toggle_equipment()
        state = self.store.get()
        self.assertTrue(state.is_inventory_open)
        self.assertFalse(state.is_equipment_open)
        self.assertTrue(state.is_skills_open)


class TestCombat(unittest.TestCase):

    def setUp(self):
        self.store = GameStateStore()

    def test_set_and_clear_enemy(self):
        goblin = Enemy(id="goblin-1", name="Goblin", health=30, max_health=30,
                       damage=4, defense=1, sprite="goblin.png")
        self.store.set_current_enemy(goblin)
        self.store.set_in_battle(True)

        state = self.store.get()
        self.assertEqual(state.current_enemy, goblin)
        self.assertTrue(state.is_in_battle)

        self.store.set_current_enemy(None)
        self.store.set_in_battle(False)
        self.assertIsNone(self.store.get().current_enemy)
        self.assertFalse(self.store.get().is_in_battle)


class TestReset(unittest.TestCase):

    def test_reset_restores_initial_snapshot(self):
        store = GameStateStore()
        initial = store.get()

        store.add_to_inventory(Item(id="potion"))
        store.equip_item(Item(id="sword"), EquipmentHand.MAIN_HAND)
        store.add_message("Hit!", MessageLevel.COMBAT)
        store.set_current_enemy(Enemy(id="rat", name="Rat", health=3, max_health=5))
        store.set_in_battle(True)
        store.toggle_inventory()
        store.toggle_skills()
        store.set_selected_item_index(4)
        store.set_selected_equipment_slot(EquipmentHand.OFF_HAND)

        store.reset()

        self.assertEqual(store.get(), initial)
        self.assertEqual(store.get(), GameState())

    def test_reset_notifies_once(self):
        store = GameStateStore()
        store.toggle_inventory()
        observer = RecordingObserver()
        store.subscribe(observer)

        store.reset()

        self.assertEqual(len(observer.snapshots), 2)
        self.assertFalse(observer.last.is_inventory_open)


if __name__ == "__main__":
    unittest.main()
