"""HTTP routers for the Chimera API"""
