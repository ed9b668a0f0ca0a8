"""HTTP and Socket.IO surface."""
