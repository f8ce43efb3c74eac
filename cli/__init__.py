"""Nova Store CLI"""
