import unittest

from nodenet import History


class TestHistory(unittest.TestCase):
    def test_append_and_last(self):
        h = History()
        h.append_iteration(0, {"loss": 2, "accuracy": 0.5})
        h.append_iteration(1, {"loss": 1.0, "accuracy": 1})

        self.assertEqual(h.iteration, [0, 1])
        self.assertEqual(h.history["loss"], [2.0, 1.0])
        self.assertIsInstance(h.history["accuracy"][1], float)
        self.assertEqual(h.last(), {"loss": 1.0, "accuracy": 1.0})
        self.assertEqual(len(h), 2)

    def test_mean(self):
        h = History()
        for i, v in enumerate([1.0, 2.0, 3.0]):
            h.append_iteration(i, {"loss": v})
        self.assertEqual(h.mean("loss"), 2.0)
        with self.assertRaises(KeyError):
            h.mean("accuracy")

    def test_empty(self):
        h = History()
        self.assertEqual(h.last(), {})
        self.assertEqual(len(h), 0)


if __name__ == "__main__":
    unittest.main()
