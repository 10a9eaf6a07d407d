'''
Contains all of the test code to make sure the code in `PGARB` is running properly.
Directory structure mirrors that of PGARB, with additional data files.

All test/test_XXXX modules contains unit testing code for PGARB/XXXX.
Test/Example simulation definitions are in PGARB/Examples/Simulations
'''
