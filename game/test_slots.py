"""Unit tests for game.slots module"""
import random
import unittest
from game.slots import Connection, SlotRegistry


class TestConnection(unittest.TestCase):

    def test_ids_are_unique_and_increasing(self):
        first = Connection(team='red')
        second = Connection(team='blue')
        self.assertLess(first.conn_id, second.conn_id)
        self.assertEqual(first.slot, 0)

    def test_is_open_follows_transport_probe(self):
        state = {'open': True}
        connection = Connection(team='red', transport_open=lambda: state['open'])
        self.assertTrue(connection.is_open)
        state['open'] = False
        self.assertFalse(connection.is_open)

    def test_mark_closed(self):
        connection = Connection(team='red')
        connection.mark_closed()
        self.assertFalse(connection.is_open)


class TestSlotRegistry(unittest.TestCase):

    def setUp(self):
        self.registry = SlotRegistry()

    def _add(self, count):
        connections = [Connection(team='red') for _ in range(count)]
        for connection in connections:
            self.registry.add(connection)
        return connections

    def test_empty_recompute_notifies_nobody(self):
        self.assertEqual(self.registry.recompute(), [])
        self.assertEqual(self.registry.total_players, 0)

    def test_slots_follow_insertion_order(self):
        connections = self._add(3)
        notified = self.registry.recompute()
        self.assertEqual(notified, connections)
        self.assertEqual([c.slot for c in connections], [1, 2, 3])
        self.assertIs(self.registry.connection_for_slot(2), connections[1])

    def test_removal_closes_the_gap(self):
        a, b, c = self._add(3)
        self.registry.recompute()
        self.registry.remove(b)
        self.registry.recompute()
        self.assertEqual((a.slot, c.slot), (1, 2))
        self.assertEqual(self.registry.total_players, 2)
        self.assertIsNone(self.registry.connection_for_slot(3))

    def test_recompute_drops_dead_connections(self):
        a, b, c = self._add(3)
        self.registry.recompute()
        a.mark_closed()
        notified = self.registry.recompute()
        self.assertEqual(notified, [b, c])
        self.assertNotIn(a, self.registry)
        self.assertEqual(a.slot, 0)
        self.assertEqual((b.slot, c.slot), (1, 2))

    def test_slot_density_under_random_churn(self):
        """Occupied slots are always exactly 1..N"""
        rng = random.Random(1234)
        live = []
        for _ in range(200):
            if live and rng.random() < 0.45:
                victim = live.pop(rng.randrange(len(live)))
                if rng.random() < 0.5:
                    self.registry.remove(victim)
                else:
                    victim.mark_closed()
            else:
                connection = Connection(team='red')
                self.registry.add(connection)
                live.append(connection)
            self.registry.recompute()
            slots = sorted(c.slot for c in live)
            self.assertEqual(slots, list(range(1, len(live) + 1)))
            self.assertEqual(self.registry.total_players, len(live))


if __name__ == '__main__':
    unittest.main()
