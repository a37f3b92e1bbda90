"""Users API module"""
