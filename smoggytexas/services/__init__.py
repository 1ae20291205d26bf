"""AWS-facing services and the region dispatch pipeline"""
