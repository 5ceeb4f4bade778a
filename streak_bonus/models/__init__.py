"""Value models shared by the streak calculators and services"""
