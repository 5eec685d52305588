"""Pricing core: arithmetic, decay engines, exclusivity, priority fees, cosigning"""
