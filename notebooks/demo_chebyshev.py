# ---
# jupyter:
#   jupytext:
#     text_representation:
#       extension: .py
#       format_name: percent
#       format_version: '1.3'
#       jupytext_version: 1.18.1
#   kernelspec:
#     display_name: Python 3
#     language: python
#     name: python3
# ---

# %% [markdown]
# ---
# title: Chebyshev Collocation and Ultraspherical Operators - 1D
# ---

# %%
import jax
import jax.numpy as jnp
import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns
from scipy import sparse
from scipy.sparse.linalg import spsolve

from pdesuite import (
    ChebyshevGrid1D,
    cheb2_cumsummat,
    cheb2_vals2coeffs,
    cheb_feval,
    ultra_convertmat,
    ultra_diffmat,
)

jax.config.update("jax_enable_x64", True)
sns.reset_defaults()
sns.set_context(context="talk", font_scale=0.7)

# %% [markdown]
# $$
# u(x) = e^{\sin(\pi x)}
# $$

# %%
f = lambda x: jnp.exp(jnp.sin(jnp.pi * x))
df = lambda x: jnp.pi * jnp.cos(jnp.pi * x) * f(x)

grid = ChebyshevGrid1D(32, kind=2, x_min=-1.0, x_max=1.0)
x_plot = jnp.linspace(-1.0, 1.0, 400)
u = f(grid.x)

# %%
fig, ax = plt.subplots(figsize=(8, 3))

ax.plot(x_plot, f(x_plot), linestyle="-", color="black", label="$u(x)$")
ax.plot(x_plot, grid.interpolate(u, x_plot), linestyle="--", color="tab:blue", label="interpolant")
ax.scatter(grid.x, u, color="r", marker="*", label="$u_i$", zorder=3)
ax.set(xlabel=r"$x$", ylabel=r"$u(x)$")
plt.legend()
plt.show()

# %% [markdown]
# ### 1st Derivative
#
# $D$ is the barycentric differentiation matrix on the Gauss-Lobatto points.

# %%
dudx = grid.D @ u

fig, ax = plt.subplots(figsize=(8, 3))
ax.plot(x_plot, df(x_plot), linestyle="-", color="black", label=r"$\partial_x u$")
ax.scatter(grid.x, dudx, color="r", marker="*", label=r"$D u$", zorder=3)
ax.set(xlabel=r"$x$")
plt.legend()
plt.show()

print(f"max error: {jnp.abs(dudx - df(grid.x)).max():.2e}")

# %% [markdown]
# ### Integration
#
# The value-space integration matrix $Q$ inverts $D$ on functions vanishing at $x = -1$.

# %%
Q = cheb2_cumsummat(grid.n)
print(f"∫ u dx          = {grid.integrate(u):.15f}")
print(f"(Q u) at x = 1  = {(Q @ u)[-1]:.15f}")
print(f"max |Q D u - (u - u(-1))| = {jnp.abs(Q @ dudx - (u - u[0])).max():.2e}")

# %% [markdown]
# ### Convergence
#
# Spectral accuracy: the error decays faster than any power of $1/n$.

# %%
ns = np.arange(4, 48, 2)
errors = []
for n in ns:
    g = ChebyshevGrid1D(int(n))
    errors.append(float(jnp.abs(g.D @ f(g.x) - df(g.x)).max()))

fig, ax = plt.subplots(figsize=(8, 3))
ax.semilogy(ns, errors, marker="o", color="black")
ax.set(xlabel=r"$n$", ylabel="max error")
plt.show()

# %% [markdown]
# ### Ultraspherical Boundary-Value Problem
#
# $$
# u'' = e^x, \quad u(\pm 1) = 0
# $$
#
# In coefficient space the second derivative maps $T$ to $C^{(2)}$ with a single
# diagonal, the right-hand side is converted $T \to C^{(2)}$ and the two
# boundary conditions take the top rows.

# %%
n = 24
D2 = ultra_diffmat(n, 2)
S = ultra_convertmat(n, 0, 2)

k = np.arange(n)
bc = sparse.csr_matrix(np.vstack([(-1.0) ** k, np.ones(n)]))
A = sparse.vstack([bc, D2[: n - 2]]).tocsr()

rhs_coeffs = np.asarray(cheb2_vals2coeffs(jnp.exp(ChebyshevGrid1D(n).x)))
b = np.r_[0.0, 0.0, (S @ rhs_coeffs)[: n - 2]]
c = spsolve(A, b)

exact = lambda x: jnp.exp(x) - x * jnp.sinh(1.0) - jnp.cosh(1.0)
u_bvp = cheb_feval(jnp.asarray(c), x_plot)

fig, ax = plt.subplots(figsize=(8, 3))
ax.plot(x_plot, exact(x_plot), linestyle="-", color="black", label="exact")
ax.plot(x_plot, u_bvp, linestyle="--", color="tab:orange", label="ultraspherical")
ax.set(xlabel=r"$x$", ylabel=r"$u(x)$")
plt.legend()
plt.show()

print(f"max error: {jnp.abs(u_bvp - exact(x_plot)).max():.2e}")
