import os
import re
import tempfile
import unittest
from copy import deepcopy
from test.testUtilities import captureOutput

from PGARB.IO import SimDefinition, defaultConfigValues
from PGARB.IO.simDefinition import (getAbsoluteFilePath, getImmediateSubKey,
                                    getKeyLevel, isSubKey)


class TestSimDefinition(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.fileName = "test/test_IO/textFileDefinition.pgarb"
        cls.simDef = SimDefinition(cls.fileName, silent=True)
        cls._simDef = deepcopy(cls.simDef)

    @classmethod
    def resetSimDef(cls):
        cls.simDef = deepcopy(cls._simDef)

    def setUp(self):
        self.resetSimDef()

    def test_detectDuplicateValue(self):
        with self.assertRaises(ValueError):
            SimDefinition("test/test_IO/duplicateKeyError.pgarb", silent=True)

    def test_badLine(self):
        with tempfile.TemporaryDirectory() as tempDir:
            path = os.path.join(tempDir, "badLine.pgarb")
            with open(path, "w") as file:
                file.write("SimControl{\n    timeStep\n}\n")

            with captureOutput() as (out, err):
                with self.assertRaises(ValueError):
                    SimDefinition(path, silent=True)

            self.assertIn("key value", out.getvalue())

    def test_noInput(self):
        with self.assertRaises(ValueError):
            SimDefinition()

    # Also testing the constructor here
    def test_getAndConstructor(self):
        self.assertEqual(self.simDef.getValue("Dictionary1.key1"), "value1")
        self.assertEqual(self.simDef.getValue("Dictionary1.key2"), "value2")
        self.assertEqual(self.simDef.getValue("Dictionary1.SubDictionary1.key3"), "value3")
        self.assertEqual(self.simDef.getValue("Dictionary1.SubDictionary1.key4"), "value4")
        self.assertEqual(self.simDef.getValue("Dictionary2.subD2.subsubD3.keyZZ"), "value with several words")

        simConfig = SimDefinition("test/test_IO/testSimDefinition.pgarb", silent=True)
        self.assertEqual(simConfig.getValue("SimControl.timeDiscretization"), "RK23Adaptive")
        self.assertEqual(simConfig.getValue("SimControl.timeStep"), "0.25")
        self.assertEqual(simConfig.getValue("SimControl.plot"), "Twist Pose")
        self.assertEqual(simConfig.getValue("RigidBody.twist"), "(0 0 0 0.1 0.001 0)")

    def test_fromDictionary(self):
        simDef = SimDefinition(dictionary={ "SimControl.timeStep": "0.1" }, silent=True)
        self.assertEqual(simDef.getValue("SimControl.timeStep"), "0.1")
        self.assertIsNone(simDef.fileName)

    def test_defaultValues(self):
        self.assertEqual(self.simDef.getValue("SimControl.timeDiscretization"), defaultConfigValues["SimControl.timeDiscretization"])
        self.assertIn("SimControl.timeDiscretization", self.simDef.defaultValuesUsed)

        with self.assertRaises(KeyError):
            self.simDef.getValue("Dictionary1.notAKey")

        customDefaults = SimDefinition(dictionary={}, defaultDict={ "A.b": "c" }, silent=True)
        self.assertEqual(customDefaults.getValue("A.b"), "c")
        with self.assertRaises(KeyError):
            customDefaults.getValue("SimControl.timeStep")

    def test_UpdateValue(self):
        self.setValueTest("Dictionary1.SubDictionary1.key3", "newValue")
        self.setValueTest("Dictionary1.key1", "1.2245")
        self.setValueTest("Dictionary2.subD2.subsubD3.keyZZ", "value5")
        self.setValueTest("NewDictionary.key", "new")

    # Test called by the actual test_ function
    def setValueTest(self, key, newVal):
        self.simDef.setValue(key, newVal)
        self.assertEqual(self.simDef.getValue(key), newVal)

    def test_setIfAbsent(self):
        self.simDef.setIfAbsent("Dictionary1.key1", "newValue")
        self.assertEqual(self.simDef.getValue("Dictionary1.key1"), "value1")

        self.simDef.setIfAbsent("Dictionary1.key5", "newValue")
        self.assertEqual(self.simDef.getValue("Dictionary1.key5"), "newValue")

    def test_removeKey(self):
        self.assertEqual(self.simDef.removeKey("Dictionary1.key1"), "value1")
        self.assertNotIn("Dictionary1.key1", self.simDef.dict)

        with captureOutput() as (out, err):
            self.assertIsNone(self.simDef.removeKey("Dictionary1.key1"))
        self.assertIn("Warning", out.getvalue())

    def test_writeToFile(self):
        with tempfile.TemporaryDirectory() as tempDir:
            testWritePath = os.path.join(tempDir, "testWrite.pgarb")
            self.simDef.writeToFile(testWritePath)

            with open(testWritePath, "r") as file:
                written = file.read()
            self.assertIsNotNone(re.search("# Autowritten on:.+?\\n", written))

            rereadSimDef = SimDefinition(testWritePath, silent=True)
            self.assertEqual(rereadSimDef, self.simDef)

            simConfig = SimDefinition("test/test_IO/testSimDefinition.pgarb", silent=True)
            testWritePath2 = os.path.join(tempDir, "testSimConfigWrite.pgarb")
            simConfig.writeToFile(testWritePath2, writeHeader=False)
            self.assertEqual(SimDefinition(testWritePath2, silent=True), simConfig)

    def test_findKeysContaining(self):
        self.assertEqual(sorted(self.simDef.findKeysContaining(["key", "SubDictionary1"])), [ "Dictionary1.SubDictionary1.key3", "Dictionary1.SubDictionary1.key4" ])
        self.assertIsNone(self.simDef.findKeysContaining(["notPresent"]))

    def test_getSubKeys(self):
        subKeys = sorted(self.simDef.getSubKeys("Dictionary1"))
        self.assertEqual(subKeys, [ "Dictionary1.SubDictionary1.key3", "Dictionary1.SubDictionary1.key4", "Dictionary1.key1", "Dictionary1.key2" ])

        # Must be followed by a '.' to count as a subkey
        self.assertEqual(self.simDef.getSubKeys("Dictionary"), [])

    def test_getImmediateSubKeys(self):
        self.assertEqual(sorted(self.simDef.getImmediateSubKeys("Dictionary1")), [ "Dictionary1.SubDictionary1", "Dictionary1.key1", "Dictionary1.key2" ])

    def test_getImmediateSubDicts(self):
        self.assertEqual(self.simDef.getImmediateSubDicts("Dictionary1"), [ "Dictionary1.SubDictionary1" ])
        self.assertEqual(self.simDef.getImmediateSubDicts("Dictionary2"), [ "Dictionary2.subD2" ])
        self.assertEqual(self.simDef.getImmediateSubDicts("Dictionary1.SubDictionary1"), [])

    def test_usageReporting(self):
        simDef = SimDefinition("test/test_IO/testSimDefinition.pgarb", silent=True)
        simDef.getValue("SimControl.timeStep")
        simDef.getValue("SimControl.Euler.stepCount")

        with captureOutput() as (out, err):
            simDef.printUnusedKeys()
            simDef.printDefaultValuesUsed()
        output = out.getvalue()

        self.assertIn("RigidBody.mass", output)
        self.assertNotIn("SimControl.timeStep:", output)
        self.assertIn("SimControl.Euler.stepCount", output)

    def test_str(self):
        self.assertIn("Dictionary1.key1: value1", str(self.simDef))

    def test_keyFunctions(self):
        self.assertTrue(isSubKey("RigidBody", "RigidBody.twist"))
        self.assertFalse(isSubKey("SimControl", "RigidBody.twist"))
        self.assertFalse(isSubKey("Rigid", "RigidBody.twist"))

        self.assertEqual(getKeyLevel(""), -1)
        self.assertEqual(getKeyLevel("SimControl"), 0)
        self.assertEqual(getKeyLevel("SimControl.Euler.stepCount"), 2)

        self.assertEqual(getImmediateSubKey("SimControl", "SimControl.TimeStepAdaptation.relativeTolerance"), "SimControl.TimeStepAdaptation")
        with self.assertRaises(ValueError):
            getImmediateSubKey("RigidBody", "SimControl.timeStep")

    def test_getAbsoluteFilePath(self):
        absPath = getAbsoluteFilePath("PGARB/Examples/Simulations/TumblingBody.pgarb")
        self.assertTrue(os.path.isabs(absPath))
        self.assertTrue(os.path.isfile(absPath))

        self.assertEqual(getAbsoluteFilePath("not/a/real/file.pgarb"), "not/a/real/file.pgarb")

#If this file is run by itself, run the tests above
if __name__ == '__main__':
    unittest.main()
