"""Tests for concentrated_liquidity"""
