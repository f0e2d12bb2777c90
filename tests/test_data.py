"""
Tests for TSPLIB loading and the command line.
"""

import contextlib
import io
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from tsp_indirect import cli
from tsp_indirect.data import Instance, load_instance, load_tsplib_instances
from tsp_indirect.errors import InstanceShapeError
from tsp_indirect.problem import TravellingSalesmanProblem


SQUARE_TSP = """NAME: square
TYPE: TSP
COMMENT: four corners of a 2x2 square
DIMENSION: 4
EDGE_WEIGHT_TYPE: EUC_2D
NODE_COORD_SECTION
1 0 0
2 0 2
3 2 2
4 2 0
EOF
"""

EXPLICIT_TSP = """NAME: explicit
TYPE: TSP
DIMENSION: 3
EDGE_WEIGHT_TYPE: EXPLICIT
EDGE_WEIGHT_FORMAT: FULL_MATRIX
EDGE_WEIGHT_SECTION
0 1 2
1 0 3
2 3 0
EOF
"""

CUBE_TSP = """NAME: cube
TYPE: TSP
DIMENSION: 3
EDGE_WEIGHT_TYPE: EUC_3D
NODE_COORD_SECTION
1 0 0 0
2 0 2 0
3 2 2 1
EOF
"""

TRIANGLE_TOUR = """NAME: triangle.tour
TYPE: TOUR
DIMENSION: 3
TOUR_SECTION
1
2
3
-1
EOF
"""

SQUARE_TOUR = """NAME: square.opt.tour
TYPE: TOUR
DIMENSION: 4
TOUR_SECTION
1
2
3
4
-1
EOF
"""


class TestLoading(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.root = Path(self.tmp.name)
        self.tsp_path = self.root / "square.tsp"
        self.tsp_path.write_text(SQUARE_TSP)

    def tearDown(self):
        self.tmp.cleanup()

    def test_load_instance(self):
        inst = load_instance(self.tsp_path)
        self.assertEqual(inst.name, "square")
        self.assertEqual(inst.dimension, 4)
        self.assertEqual(inst.coords, [(0, 0), (0, 2), (2, 2), (2, 0)])
        self.assertIsNone(inst.optimum)
        self.assertEqual(inst.graph.number_of_nodes(), 4)

    def test_optimum_from_tour_file(self):
        (self.root / "square.opt.tour").write_text(SQUARE_TOUR)
        inst = load_instance(self.tsp_path)
        self.assertEqual(inst.optimum, 8.0)

    def test_optimum_from_solutions_dir(self):
        (self.root / "solutions").mkdir()
        (self.root / "solutions" / "square.tour").write_text(SQUARE_TOUR)
        self.assertEqual(load_instance(self.tsp_path).optimum, 8.0)

    def test_problem_from_instance(self):
        problem = TravellingSalesmanProblem.from_instance(load_instance(self.tsp_path))
        self.assertEqual(problem.name, "square")
        self.assertEqual(problem.evaluate_fitness([0, 1, 2, 3]), 8)

    def test_problem_from_tsplib_graph(self):
        inst = load_instance(self.tsp_path)
        problem = TravellingSalesmanProblem.from_graph(inst.graph)
        self.assertEqual(problem.evaluate_fitness([0, 1, 2, 3]), 8)

    def test_tour_file_of_wrong_size_is_ignored(self):
        (self.root / "square.opt.tour").write_text(TRIANGLE_TOUR)
        self.assertIsNone(load_instance(self.tsp_path).optimum)

    def test_instance_without_coordinates_is_rejected(self):
        path = self.root / "explicit.tsp"
        path.write_text(EXPLICIT_TSP)
        with self.assertRaises(InstanceShapeError):
            load_instance(path)

    def test_three_dimensional_coordinates_are_rejected(self):
        path = self.root / "cube.tsp"
        path.write_text(CUBE_TSP)
        with self.assertRaises(InstanceShapeError):
            load_instance(path)

    def test_load_directory(self):
        self.assertEqual([i.name for i in load_tsplib_instances(self.root)], ["square"])
        self.assertEqual(load_tsplib_instances(self.root, max_nodes=3), [])
        self.assertEqual(len(load_tsplib_instances(self.root, max_instances=1)), 1)


class TestCli(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.root = Path(self.tmp.name)
        (self.root / "square.tsp").write_text(SQUARE_TSP)
        (self.root / "square.opt.tour").write_text(SQUARE_TOUR)

    def tearDown(self):
        self.tmp.cleanup()

    def _run(self, argv):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            code = cli.main(argv)
        return code, out.getvalue()

    def test_info(self):
        code, out = self._run(["info", str(self.root / "square.tsp")])
        self.assertEqual(code, 0)
        self.assertIn("square: dimension=4 optimum=8", out)

    def test_search(self):
        code, out = self._run(["search", str(self.root), "--restarts", "3", "--show-path"])
        self.assertEqual(code, 0)
        self.assertIn("best=8 tried=3", out)
        self.assertIn("gap=0.00%", out)
        self.assertIn("Path: {", out)

    def test_search_torch_backend(self):
        code, out = self._run(
            ["search", str(self.root / "square.tsp"), "--backend", "torch", "--device", "cpu"]
        )
        self.assertEqual(code, 0)
        self.assertIn("best=8", out)

    def _assert_usage_error(self, argv):
        err = io.StringIO()
        with contextlib.redirect_stderr(err), self.assertRaises(SystemExit) as cm:
            self._run(argv)
        self.assertEqual(cm.exception.code, 2)
        self.assertIn("expected an integer >= 1", err.getvalue())

    def test_search_rejects_zero_restarts(self):
        self._assert_usage_error(["search", str(self.root / "square.tsp"), "--restarts", "0"])

    def test_search_rejects_zero_max_sweeps(self):
        self._assert_usage_error(["search", str(self.root / "square.tsp"), "--max-sweeps", "0"])

    def test_search_single_sweep(self):
        code, out = self._run(["search", str(self.root / "square.tsp"), "--max-sweeps", "1"])
        self.assertEqual(code, 0)
        self.assertIn("tried=1", out)

    def test_empty_instance_exits_with_error(self):
        empty = Instance(name="empty", path=self.root / "empty.tsp", graph=None, coords=[], optimum=None)
        err = io.StringIO()
        with mock.patch.object(cli, "load_instance", return_value=empty), contextlib.redirect_stderr(err):
            code, _ = self._run(["search", str(self.root / "empty.tsp")])
        self.assertEqual(code, 1)
        self.assertIn("Zero nodes", err.getvalue())


if __name__ == '__main__':
    unittest.main()
